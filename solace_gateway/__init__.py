"""Solace API gateway: brokers chat, tips and speech calls to Google AI services."""
