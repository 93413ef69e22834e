"""Aplicações de demonstração do host de console."""
