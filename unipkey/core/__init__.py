"""Базовые типы: исключения, протоколы, реестр алгоритмов подписи."""
