"""Core data model, diagnostics and configuration for lua2bind"""
