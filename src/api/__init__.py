"""API — camada de borda HTTP consumida pelo widget de chat.

Responsabilidades:
- Receber requests do widget
- Validar payloads (pydantic)
- Delegar para o serviço de chat
- Mapear erros de domínio para status HTTP

Subpastas:
- routes/: endpoints HTTP (chat, health)

NÃO PODE conter: FSM, regras do respondedor, orquestração de sessão.
"""
