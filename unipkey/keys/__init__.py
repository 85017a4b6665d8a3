"""Варианты ключей и PKey."""
