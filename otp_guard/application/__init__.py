"""Application layer: OTP engine, commands, handlers and DTOs.

Imports only from core and domain; infrastructure is injected through
domain protocols.
"""
