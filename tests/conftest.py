"""Configuração do pytest para o projeto dentalspa-chat."""

import random
import sys
from pathlib import Path

import pytest

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def catalog():
    """Catálogo de respostas empacotado."""
    from chatbot.config.catalog_loader import load_reply_catalog

    return load_reply_catalog()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def manual_clock():
    from tests.fakes.fake_clock import ManualClock

    return ManualClock()
