"""
Тесты для модуля file_ops.py
"""

from unittest.mock import Mock, patch

import pytest

from pathmap_scanner.file_ops import (
    BatchWriter,
    WorkDir,
    WorkDirError,
    batch_file_name,
)
from pathmap_scanner.logger import PathmapLogger


@pytest.fixture
def mock_logger():
    """Создает мок логгера."""
    return Mock(spec=PathmapLogger)


class TestBatchFileName:

    def test_batch_file_name(self):
        assert batch_file_name("maven", 0) == "maven-batch-0.txt"
        assert batch_file_name("generic-http", 12) == "generic-http-batch-12.txt"


class TestWorkDir:
    """Тесты для класса WorkDir."""

    @pytest.fixture
    def work_dir(self, tmp_path, mock_logger):
        base = tmp_path / "storage"
        base.mkdir()
        return WorkDir(tmp_path / "work", base, mock_logger)

    def test_paths(self, work_dir, tmp_path):
        assert work_dir.todo_path == tmp_path / "work" / "todo"
        assert work_dir.processed_path == tmp_path / "work" / "processed"
        assert work_dir.status_path == tmp_path / "storage" / "scan_status"

    def test_prepare_creates_directories(self, work_dir, mock_logger):
        """Тест создания каталогов todo и processed."""
        work_dir.prepare()

        assert work_dir.todo_path.is_dir()
        assert work_dir.processed_path.is_dir()
        mock_logger.log_directory_cleaned.assert_not_called()

    def test_prepare_removes_previous_content(self, work_dir, mock_logger):
        """Тест очистки каталогов от результатов прошлого запуска."""
        work_dir.todo_path.mkdir(parents=True)
        (work_dir.todo_path / "maven-batch-0.txt").write_text("/old/path\n")
        (work_dir.processed_path / "nested").mkdir(parents=True)

        work_dir.prepare()

        assert list(work_dir.todo_path.iterdir()) == []
        assert list(work_dir.processed_path.iterdir()) == []
        assert mock_logger.log_directory_cleaned.call_count == 2

    def test_prepare_continues_when_cleanup_fails(self, work_dir, mock_logger):
        work_dir.todo_path.mkdir(parents=True)

        with patch('pathmap_scanner.file_ops.shutil.rmtree', side_effect=OSError("busy")):
            work_dir.prepare()

        assert work_dir.todo_path.is_dir()
        assert work_dir.processed_path.is_dir()
        mock_logger.log_warning.assert_called_once()

    def test_prepare_fails_when_directory_cannot_be_created(self, tmp_path, mock_logger):
        """Тест ошибки, когда рабочий каталог является файлом."""
        blocker = tmp_path / "work"
        blocker.write_text("")
        work_dir = WorkDir(blocker, tmp_path, mock_logger)

        with pytest.raises(WorkDirError):
            work_dir.prepare()

        mock_logger.log_critical_error.assert_called_once()

    def test_store_total_appends(self, work_dir, mock_logger):
        """Тест записи итогового количества в файл статуса."""
        assert work_dir.store_total(3) is True
        assert work_dir.store_total(0) is True

        assert work_dir.status_path.read_text() == "Total:3\nTotal:0\n"
        assert mock_logger.log_total_stored.call_count == 2

    def test_store_total_failure(self, tmp_path, mock_logger):
        work_dir = WorkDir(tmp_path / "work", tmp_path / "missing", mock_logger)

        assert work_dir.store_total(5) is False
        mock_logger.log_write_error.assert_called_once()
        mock_logger.log_total_stored.assert_not_called()


class TestBatchWriter:
    """Тесты для класса BatchWriter."""

    @pytest.fixture
    def todo_dir(self, tmp_path):
        path = tmp_path / "todo"
        path.mkdir()
        return path

    @pytest.fixture
    def writer(self, todo_dir, mock_logger):
        return BatchWriter(todo_dir, mock_logger)

    def test_write_batch(self, writer, todo_dir, mock_logger):
        """Тест записи батча путей."""
        result = writer.write_batch(["/data/maven/a.jar", "/data/maven/sub/b.jar"], "maven", 0)

        batch_file = todo_dir / "maven-batch-0.txt"
        assert batch_file.read_text() == "/data/maven/a.jar\n/data/maven/sub/b.jar\n"
        assert result.persisted is True
        assert result.file_path == batch_file
        assert result.batch_index == 0
        assert result.path_count == 2
        assert result.error is None

        mock_logger.log_batch_start.assert_called_once_with(0, "maven-batch-0.txt")
        mock_logger.log_batch_end.assert_called_once_with(0, "maven-batch-0.txt", 2)

    def test_write_batch_appends_to_existing_file(self, writer, todo_dir):
        writer.write_batch(["/a"], "npm", 1)
        writer.write_batch(["/b"], "npm", 1)

        assert (todo_dir / "npm-batch-1.txt").read_text() == "/a\n/b\n"

    def test_write_batch_keeps_order_and_duplicates(self, writer, todo_dir):
        writer.write_batch(["/z", "/a", "/z"], "maven", 0)

        assert (todo_dir / "maven-batch-0.txt").read_text().splitlines() == ["/z", "/a", "/z"]

    def test_write_batch_failure_is_reported(self, tmp_path, mock_logger):
        """Тест ошибки открытия файла батча: исключение не выбрасывается."""
        writer = BatchWriter(tmp_path / "missing", mock_logger)

        result = writer.write_batch(["/a", "/b"], "maven", 0)

        assert result.persisted is False
        assert result.path_count == 2
        assert isinstance(result.error, OSError)
        mock_logger.log_write_error.assert_called_once()
        mock_logger.log_batch_end.assert_not_called()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
