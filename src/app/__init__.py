"""App: orquestração do checkout, casos de uso e wiring.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos do checkout (formulário, credenciamento, resultado)
- use_cases/: sequência do checkout e política por etapa
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas em log estruturado

Padrão: app executa; api adapta; config configura; utils apoia.
"""
