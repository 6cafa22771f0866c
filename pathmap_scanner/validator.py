"""
Проверка базового каталога хранилища перед сканированием.
"""

from pathlib import Path
from typing import Union


MARKER_PACKAGE = "maven"


class ScanError(Exception):
    """Базовое исключение для фатальных ошибок сканирования."""
    pass


class BaseDirValidationError(ScanError):
    """Исключение для некорректного базового каталога."""
    pass


def validate_base_dir(base_dir: Union[str, Path]) -> Path:
    """
    Проверяет, что базовый каталог является хранилищем артефактов.

    Каталог должен существовать и содержать подкаталог maven.

    Args:
        base_dir: Путь к базовому каталогу

    Returns:
        Path: Проверенный путь

    Raises:
        BaseDirValidationError: Если каталог не прошел проверку
    """
    base_path = Path(base_dir)

    if not base_path.is_dir():
        raise BaseDirValidationError(
            f"Базовый каталог {base_path} не существует или не является каталогом"
        )

    if not (base_path / MARKER_PACKAGE).is_dir():
        raise BaseDirValidationError(
            f"Базовый каталог {base_path} не является хранилищем артефактов "
            f"(нет подкаталога {MARKER_PACKAGE})"
        )

    return base_path
