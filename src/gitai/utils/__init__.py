"""Utility helpers for GitAI."""
