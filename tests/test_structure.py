"""
Structure lint tests.
Verify the component layout and its conventions.
"""

from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
COMPONENTS = ["query", "relations", "mutation"]


class TestProjectStructure:
    """Verify project structure follows the component conventions."""

    def test_core_directories_exist(self) -> None:
        """Functional core directories must exist."""
        assert (PROJECT_ROOT / "src" / "domain").is_dir()
        assert (PROJECT_ROOT / "src" / "core" / "ports").is_dir()

    def test_shell_directories_exist(self) -> None:
        """Shell (imperative) directories must exist."""
        assert (PROJECT_ROOT / "src" / "api" / "routes").is_dir()
        assert (PROJECT_ROOT / "src" / "app_shell").is_dir()
        assert (PROJECT_ROOT / "src" / "adapters").is_dir()

    def test_tests_structure_exists(self) -> None:
        """Test directories must follow conventions."""
        assert (PROJECT_ROOT / "tests" / "unit").is_dir()
        assert (PROJECT_ROOT / "tests" / "integration").is_dir()
        assert (PROJECT_ROOT / "tests" / "regression").is_dir()

    def test_components_follow_layout(self) -> None:
        """Each component has models, ports, an entry point and tests."""
        for name in COMPONENTS:
            root = PROJECT_ROOT / "src" / "components" / name
            for module in ("__init__.py", "models.py", "ports.py", "component.py"):
                assert (root / module).is_file(), f"{name} is missing {module}"
            assert (root / "tests" / "test_unit.py").is_file(), f"{name} has no tests"

    def test_components_do_not_import_shell(self) -> None:
        """Components stay independent of FastAPI and the adapters."""
        for path in (PROJECT_ROOT / "src" / "components").rglob("*.py"):
            if "tests" in path.parts:
                continue
            source = path.read_text(encoding="utf-8")
            assert "fastapi" not in source, f"{path} imports fastapi"
            assert "src.adapters" not in source, f"{path} imports an adapter"

    def test_config_files_present(self) -> None:
        assert (PROJECT_ROOT / "rules.yaml").is_file()
        assert (PROJECT_ROOT / "pyproject.toml").is_file()
