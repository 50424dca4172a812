import sys
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


class TestProjectStructure:

    def test_directories_exist(self):
        project_root = Path(__file__).parent.parent

        required_dirs = [
            project_root / "lua2bind" / "core",
            project_root / "lua2bind" / "analyzers",
            project_root / "lua2bind" / "generators",
            project_root / "lua2bind" / "module_system",
            project_root / "lua2bind" / "cli",
            project_root / "tests" / "lua",
        ]

        for directory in required_dirs:
            assert directory.is_dir(), f"Required directory {directory} does not exist"

    def test_package_structure(self):
        project_root = Path(__file__).parent.parent
        init_file = project_root / "lua2bind" / "__init__.py"

        assert init_file.is_file(), f"Package __init__.py at {init_file} does not exist"

    def test_pyproject_toml_valid(self):
        project_root = Path(__file__).parent.parent
        pyproject_path = project_root / "pyproject.toml"

        assert pyproject_path.is_file(), f"pyproject.toml at {pyproject_path} does not exist"

        with open(pyproject_path, "rb") as f:
            config = tomllib.load(f)

        assert config["project"]["name"] == "lua2bind"
        assert config["project"]["scripts"]["lua2bind"] == "lua2bind.cli.main:main"

    def test_version_matches(self):
        import lua2bind

        project_root = Path(__file__).parent.parent
        with open(project_root / "pyproject.toml", "rb") as f:
            config = tomllib.load(f)

        assert config["project"]["version"] == lua2bind.__version__
