"""Rotas HTTP da integração DealMaker."""
