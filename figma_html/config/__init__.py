"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Application settings loaded from the environment and .env
- logging: Structured logging configuration
"""
