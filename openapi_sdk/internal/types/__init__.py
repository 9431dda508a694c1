"""Модели документа, IR генерируемого кода и диагностики"""
