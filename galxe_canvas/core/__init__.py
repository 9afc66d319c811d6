"""Configuration, logging, models and exceptions shared by the service."""
