"""
Модуль для загрузки и валидации конфигурации приложения.

Параметры берутся из необязательного файла config/settings.ini,
после чего могут быть переопределены аргументами командной строки.
Итоговая конфигурация неизменяема и передается во все компоненты явно.
"""

import configparser
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional


DEFAULT_CONFIG_PATH = "config/settings.ini"
DEFAULT_BASE_DIR = "/opt/indy/var/lib/indy/storage"
DEFAULT_WORK_DIR = "./"
DEFAULT_BATCH_SIZE = 50000

REMAINDER_LEGACY = "legacy"
REMAINDER_CONTIGUOUS = "contiguous"
REMAINDER_NUMBERING_MODES = (REMAINDER_LEGACY, REMAINDER_CONTIGUOUS)

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass(frozen=True)
class ScanConfig:
    """Конфигурация сканирования."""
    base_dir: Path
    work_dir: Path
    batch_size: int
    remainder_numbering: str = REMAINDER_LEGACY


@dataclass(frozen=True)
class LoggingConfig:
    """Конфигурация логирования."""
    level: str
    log_file: Optional[Path]
    max_log_size: int
    backup_count: int


@dataclass(frozen=True)
class Config:
    """Основная конфигурация приложения."""
    scan: ScanConfig
    logging: LoggingConfig


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации. Если не указан, используется
                config/settings.ini при его наличии, иначе значения по умолчанию.
        """
        self.explicit = config_path is not None
        self.config_path = Path(config_path if config_path is not None else DEFAULT_CONFIG_PATH)

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Returns:
            Config: Объект конфигурации

        Raises:
            FileNotFoundError: Если явно указанный файл конфигурации не найден
            ValueError: Если конфигурация некорректна
        """
        config_parser = configparser.ConfigParser()

        if self.config_path.exists():
            config_parser.read(self.config_path, encoding='utf-8')
        elif self.explicit:
            raise FileNotFoundError(f"Файл конфигурации не найден: {self.config_path}")

        try:
            config = Config(
                scan=self._load_scan_config(config_parser),
                logging=self._load_logging_config(config_parser)
            )
        except (configparser.Error, ValueError) as e:
            raise ValueError(f"Ошибка загрузки конфигурации: {e}")

        validate_config(config)
        return config

    def _load_scan_config(self, parser: configparser.ConfigParser) -> ScanConfig:
        """Загружает параметры сканирования."""
        section = 'scan'

        if not parser.has_section(section):
            return ScanConfig(
                base_dir=Path(DEFAULT_BASE_DIR),
                work_dir=Path(DEFAULT_WORK_DIR),
                batch_size=DEFAULT_BATCH_SIZE
            )

        return ScanConfig(
            base_dir=Path(parser.get(section, 'base_dir', fallback=DEFAULT_BASE_DIR)),
            work_dir=Path(parser.get(section, 'work_dir', fallback=DEFAULT_WORK_DIR)),
            batch_size=parser.getint(section, 'batch_size', fallback=DEFAULT_BATCH_SIZE),
            remainder_numbering=parser.get(section, 'remainder_numbering', fallback=REMAINDER_LEGACY)
        )

    def _load_logging_config(self, parser: configparser.ConfigParser) -> LoggingConfig:
        """Загружает конфигурацию логирования."""
        section = 'logging'

        log_file = parser.get(section, 'log_file', fallback='')

        return LoggingConfig(
            level=parser.get(section, 'level', fallback='INFO'),
            # Пустое значение отключает файловый лог
            log_file=Path(log_file) if log_file.strip() else None,
            max_log_size=parser.getint(section, 'max_log_size', fallback=10),
            backup_count=parser.getint(section, 'backup_count', fallback=5)
        )


def validate_config(config: Config) -> None:
    """
    Валидирует конфигурацию.

    Raises:
        ValueError: Если какой-либо параметр некорректен
    """
    if config.scan.batch_size <= 0:
        raise ValueError("Размер батча должен быть больше 0")

    if config.scan.remainder_numbering not in REMAINDER_NUMBERING_MODES:
        raise ValueError(f"Некорректная схема нумерации батчей: {config.scan.remainder_numbering}")

    if config.logging.level.upper() not in VALID_LOG_LEVELS:
        raise ValueError(f"Некорректный уровень логирования: {config.logging.level}")

    if config.logging.max_log_size <= 0:
        raise ValueError("Размер файла лога должен быть больше 0")

    if config.logging.backup_count < 0:
        raise ValueError("Количество резервных копий лога не может быть отрицательным")


def apply_overrides(config: Config, base_dir: Optional[str] = None,
                    work_dir: Optional[str] = None, batch_size: Optional[int] = None) -> Config:
    """
    Возвращает новую конфигурацию с параметрами из командной строки.

    Переданные значения None не меняют соответствующие поля.
    """
    changes = {}
    if base_dir is not None:
        changes['base_dir'] = Path(base_dir)
    if work_dir is not None:
        changes['work_dir'] = Path(work_dir)
    if batch_size is not None:
        changes['batch_size'] = batch_size

    if not changes:
        return config

    new_config = replace(config, scan=replace(config.scan, **changes))
    validate_config(new_config)
    return new_config


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()
