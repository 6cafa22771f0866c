"""
Модуль сканирования пакета хранилища.

Рекурсивно обходит каталог пакета, накапливает пути обычных файлов
в буфере и сбрасывает их в файлы батчей по мере заполнения буфера.
"""

import os
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Tuple

from .config_loader import REMAINDER_CONTIGUOUS, ScanConfig
from .file_ops import BatchWriter, BatchWriteResult
from .logger import PathmapLogger


@dataclass
class ScanResult:
    """Результат сканирования одного пакета."""
    package: str
    file_count: int = 0
    batches: List[BatchWriteResult] = field(default_factory=list)
    walk_errors: List[Tuple[str, OSError]] = field(default_factory=list)

    @property
    def failed_batches(self) -> List[BatchWriteResult]:
        return [batch for batch in self.batches if not batch.persisted]

    @property
    def lost_paths(self) -> int:
        """Количество путей, которые не удалось записать."""
        return sum(batch.path_count for batch in self.failed_batches)


def iter_regular_files(root: str, on_error: Callable[[str, OSError], None]) -> Iterator[str]:
    """
    Обходит дерево каталогов в глубину и возвращает пути обычных файлов.

    Элементы каталога перебираются в порядке сортировки имен, подкаталог
    обходится сразу при встрече. Символические ссылки не разыменовываются
    и, как и специальные файлы, пропускаются. Это относится и к самому root:
    если он является ссылкой, обход ничего не возвращает. Ошибки чтения отдельных
    элементов передаются в on_error, обход продолжается.

    Args:
        root: Корень обхода
        on_error: Обработчик ошибок (путь, исключение)
    """
    stack: List[Iterator[os.DirEntry]] = []

    def open_dir(path: str) -> None:
        try:
            with os.scandir(path) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            on_error(path, e)
            return
        stack.append(iter(entries))

    if os.path.islink(root):
        return

    open_dir(root)
    while stack:
        entry = next(stack[-1], None)
        if entry is None:
            stack.pop()
            continue

        try:
            if entry.is_dir(follow_symlinks=False):
                open_dir(entry.path)
            elif entry.is_file(follow_symlinks=False):
                yield entry.path
        except OSError as e:
            on_error(entry.path, e)


class PackageScanner:
    """Класс для сканирования пакета и записи путей батчами."""

    def __init__(self, config: ScanConfig, writer: BatchWriter, logger: PathmapLogger):
        """
        Инициализация сканера.

        Args:
            config: Конфигурация сканирования
            writer: Запись батчей в файлы
            logger: Логгер для записи операций
        """
        self.config = config
        self.writer = writer
        self.logger = logger

    def scan(self, package: str) -> ScanResult:
        """
        Сканирует каталог пакета в базовом каталоге.

        Полные батчи нумеруются с 0. Номер последнего неполного батча
        зависит от схемы нумерации в конфигурации: legacy пропускает один
        номер после последнего полного батча, contiguous продолжает счет.

        Args:
            package: Имя пакета (подкаталога базового каталога)

        Returns:
            ScanResult: Результат сканирования
        """
        result = ScanResult(package=package)
        package_root = os.path.abspath(os.path.join(self.config.base_dir, package))

        def on_error(path: str, error: OSError) -> None:
            result.walk_errors.append((path, error))
            self.logger.log_walk_error(path, error)

        self.logger.log_package_start(package)

        buffer: List[str] = []
        batch_index = 0
        for file_path in iter_regular_files(package_root, on_error):
            buffer.append(file_path)
            result.file_count += 1
            if len(buffer) >= self.config.batch_size:
                result.batches.append(self.writer.write_batch(buffer, package, batch_index))
                batch_index += 1
                buffer = []

        if buffer:
            if self.config.remainder_numbering == REMAINDER_CONTIGUOUS:
                remainder_index = batch_index
            else:
                remainder_index = batch_index + 1
            result.batches.append(self.writer.write_batch(buffer, package, remainder_index))

        if result.walk_errors:
            self.logger.log_warning(
                f"Пакет {package}: пропущено элементов из-за ошибок чтения: {len(result.walk_errors)}"
            )
        self.logger.log_package_end(package, result.file_count)

        return result
