"""
Тесты для модуля validator.py
"""

import pytest

from pathmap_scanner.validator import BaseDirValidationError, ScanError, validate_base_dir


class TestValidateBaseDir:
    """Тесты проверки базового каталога."""

    def test_valid_storage(self, tmp_path):
        (tmp_path / "maven").mkdir()

        assert validate_base_dir(str(tmp_path)) == tmp_path

    def test_missing_base_dir(self, tmp_path):
        with pytest.raises(BaseDirValidationError, match="не существует"):
            validate_base_dir(tmp_path / "missing")

    def test_base_dir_is_file(self, tmp_path):
        base = tmp_path / "storage"
        base.write_text("not a directory")

        with pytest.raises(BaseDirValidationError, match="не является каталогом"):
            validate_base_dir(base)

    def test_missing_marker(self, tmp_path):
        (tmp_path / "npm").mkdir()

        with pytest.raises(BaseDirValidationError, match="maven"):
            validate_base_dir(tmp_path)

    def test_marker_is_file(self, tmp_path):
        (tmp_path / "maven").write_text("")

        with pytest.raises(BaseDirValidationError):
            validate_base_dir(tmp_path)

    def test_error_is_scan_error(self):
        assert issubclass(BaseDirValidationError, ScanError)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
