"""App — orquestração das sessões de chat e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- services/: serviço de aplicação do chat
- infra/: implementações concretas de IO (store em memória)
- protocols/: contratos/interfaces (store, relógio)
- sessions/: sessão de chat, inatividade e relógio
- observability/: logs estruturados, correlation_id, métricas

Padrão: app executa; api adapta; chatbot responde; fsm governa; utils apoia.
"""
