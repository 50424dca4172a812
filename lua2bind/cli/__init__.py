"""Command-line interface for lua2bind"""
