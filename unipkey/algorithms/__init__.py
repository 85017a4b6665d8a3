"""Алгоритмы: хеши, построение идентификатора подписи, провайдер движков."""
