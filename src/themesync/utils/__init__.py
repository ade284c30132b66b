"""Shared utilities: logging, color math, serialization helpers"""
