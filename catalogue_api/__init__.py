"""Catalogue API: product catalogue management backend."""
