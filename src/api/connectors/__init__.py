"""Connectors: adapters de borda para APIs externas.

Estrutura:
- dealmaker/: API DealMaker (token OAuth2, REST, webhooks)
"""

__all__: list[str] = []
