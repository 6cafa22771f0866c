"""
Pathmap Scanner

Утилита для сканирования хранилища артефактов и подготовки списков путей
(батчей) для последующей миграции.
"""

__version__ = "1.0.0"
__author__ = "Pathmap Migrator Team"
__description__ = "Utility for scanning artifact storage and batching file paths for migration"
