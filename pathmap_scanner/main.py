"""
Главный модуль CLI интерфейса утилиты сканирования хранилища.

Предоставляет команду scan, которая формирует списки путей файлов
для последующей миграции.
"""

import argparse
import sys
from typing import List, Optional

from .config_loader import (
    DEFAULT_BASE_DIR,
    DEFAULT_BATCH_SIZE,
    DEFAULT_WORK_DIR,
    apply_overrides,
    load_config,
)
from .logger import PathmapLogger
from .orchestrator import create_orchestrator
from .validator import BaseDirValidationError, ScanError


class PathmapScannerCLI:
    """Класс для обработки команд CLI."""

    def __init__(self):
        self.config = None
        self.logger = None
        self.orchestrator = None

    def setup(self, config_path: Optional[str] = None, base_dir: Optional[str] = None,
              work_dir: Optional[str] = None, batch_size: Optional[int] = None) -> bool:
        """
        Инициализирует CLI с конфигурацией.

        Args:
            config_path: Путь к файлу конфигурации
            base_dir: Базовый каталог хранилища из командной строки
            work_dir: Рабочий каталог из командной строки
            batch_size: Размер батча из командной строки

        Returns:
            bool: True если инициализация успешна
        """
        try:
            config = load_config(config_path)
            self.config = apply_overrides(config, base_dir=base_dir, work_dir=work_dir,
                                          batch_size=batch_size)

            self.logger = PathmapLogger(self.config.logging)
            self.orchestrator = create_orchestrator(self.config, self.logger)

            if config_path:
                self.logger.log_system_info(f"Конфигурация загружена из: {config_path}")
            return True

        except (OSError, ValueError) as e:
            print(f"❌ Ошибка инициализации: {e}")
            return False

    def cmd_scan(self, args) -> int:
        """
        Команда сканирования хранилища.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата (0 - успех, 1 - ошибка)
        """
        try:
            stats = self.orchestrator.run()
        except BaseDirValidationError as e:
            print(f"❌ Ошибка: {e}")
            return 1
        except ScanError as e:
            print(f"❌ Ошибка сканирования: {e}")
            return 1

        print(f"\n✅ Сканирование завершено!")
        print(f"📊 Статистика:")
        if not stats.results:
            print("   • Пакеты для сканирования не найдены")
        for result in stats.results:
            print(f"   • {result.package}: {result.file_count}")
        print(f"   • Всего файлов для миграции: {stats.total_files}")
        print(f"   • Продолжительность: {stats.get_duration():.2f} сек")

        if stats.lost_paths:
            print(f"\n⚠️ Не удалось записать путей: {stats.lost_paths}")
            for result in stats.results:
                for batch in result.failed_batches:
                    print(f"   • {batch.file_path}: {batch.error}")

        if stats.walk_error_count:
            print(f"\n⚠️ Пропущено элементов при обходе: {stats.walk_error_count}")

        if not stats.total_stored:
            print("\n⚠️ Итоговое количество не сохранено в файл статуса")

        return 0


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        prog='pathmap-scanner',
        description="Сканирование хранилища артефактов и подготовка путей к миграции",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Сканирование с параметрами по умолчанию
  pathmap-scanner scan

  # Сканирование указанного хранилища
  pathmap-scanner scan --base /data/storage --workdir /tmp/migration --batch 10000
        """
    )

    # Общие аргументы
    parser.add_argument(
        '--config',
        default=None,
        help='Путь к файлу конфигурации (по умолчанию: config/settings.ini, если существует)'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод'
    )

    # Подкоманды
    subparsers = parser.add_subparsers(dest='command', help='Доступные команды')

    # Команда scan
    scan_parser = subparsers.add_parser('scan', help='Сканирование хранилища и запись путей в батчи')
    scan_parser.add_argument(
        '--base', '-b',
        default=None,
        help=f'Базовый каталог хранилища артефактов (по умолчанию: {DEFAULT_BASE_DIR})'
    )
    scan_parser.add_argument(
        '--workdir', '-w',
        default=None,
        help=f'Рабочий каталог для генерируемых файлов (по умолчанию: {DEFAULT_WORK_DIR})'
    )
    scan_parser.add_argument(
        '--batch', '-B',
        type=int,
        default=None,
        help=f'Количество путей в одном батче (по умолчанию: {DEFAULT_BATCH_SIZE})'
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Главная функция CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    # Проверяем, что команда указана
    if not args.command:
        parser.print_help()
        return 1

    cli = PathmapScannerCLI()

    if not cli.setup(args.config, base_dir=args.base, work_dir=args.workdir, batch_size=args.batch):
        return 1

    try:
        if args.command == 'scan':
            return cli.cmd_scan(args)
        else:
            print(f"❌ Неизвестная команда: {args.command}")
            return 1

    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем")
        return 1
    except Exception as e:
        print(f"❌ Неожиданная ошибка: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
