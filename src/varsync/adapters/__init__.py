"""Adapters implementing varsync domain ports."""
