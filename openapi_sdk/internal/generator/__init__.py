"""Классификация операций, синтез методов и эмиссия файла"""
