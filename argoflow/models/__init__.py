"""Data models for argoflow."""
