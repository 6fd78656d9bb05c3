"""argoflow - live Argo CD application topology in the terminal."""

__version__ = "0.1.0"
