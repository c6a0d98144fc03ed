"""Caching proxy in front of PokeAPI."""
