"""Render backends that turn an avatar configuration into pixels."""
