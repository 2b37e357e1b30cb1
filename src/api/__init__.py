"""API: camada de borda com a DealMaker e com o site.

Responsabilidades:
- Receber requests do site (checkout, consultas) e webhooks do provedor
- Validar assinaturas e payloads
- Falar com a API REST da DealMaker

Subpastas:
- connectors/: token, cliente HTTP e webhook da DealMaker
- routes/: endpoints HTTP (checkout, deals, token, webhook, health)

NÃO PODE conter: sequência do checkout nem políticas de falha por etapa.
"""
