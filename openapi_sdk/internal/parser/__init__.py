"""Загрузка OpenAPI документа"""
