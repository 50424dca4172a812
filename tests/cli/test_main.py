"""Test CLI main module"""

import pytest
from lua2bind.cli.main import main


@pytest.fixture
def scripts_dir(tmp_path):
    scripts = tmp_path / "scripts"
    scripts.mkdir()
    (scripts / "game.lua").write_text("score = 0\nfunction reset() end\n")
    return scripts


class TestCliMain:
    """Test suite for CLI main"""

    def test_generates_headers(self, scripts_dir, tmp_path, capsys):
        """Test generating headers for a directory"""
        out_dir = tmp_path / "out"

        status = main([str(scripts_dir), "--output-dir", str(out_dir), "--namespace", "Game"])

        assert status == 0
        header = out_dir / "GameScript.g.hpp"
        assert header.is_file()
        assert "namespace Game {" in header.read_text()

        captured = capsys.readouterr()
        assert f"Generated: {header}" in captured.out
        assert "info LB006:" in captured.err

    def test_unchanged_files_not_rewritten(self, scripts_dir, tmp_path, capsys):
        """Test that a second run leaves identical output alone"""
        out_dir = tmp_path / "out"
        main([str(scripts_dir), "--output-dir", str(out_dir)])
        capsys.readouterr()

        status = main([str(scripts_dir), "--output-dir", str(out_dir), "-v"])

        captured = capsys.readouterr()
        assert status == 0
        assert "Generated:" not in captured.out
        assert "Unchanged:" in captured.out

    def test_changed_file_rewritten(self, scripts_dir, tmp_path, capsys):
        """Test that a modified script regenerates its header"""
        out_dir = tmp_path / "out"
        main([str(scripts_dir), "--output-dir", str(out_dir)])
        (scripts_dir / "game.lua").write_text("score = 0\nlives = 3\n")
        capsys.readouterr()

        main([str(scripts_dir), "--output-dir", str(out_dir)])

        assert "Generated:" in capsys.readouterr().out
        assert "Lives()" in (out_dir / "GameScript.g.hpp").read_text()

    def test_config_file(self, scripts_dir, tmp_path):
        """Test that YAML settings are applied"""
        out_dir = tmp_path / "from_config"
        config_file = tmp_path / "lua2bind.yaml"
        config_file.write_text(f"lua2bind:\n  namespace: FromConfig\n  output_dir: '{out_dir.as_posix()}'\n")

        status = main([str(scripts_dir), "--config", str(config_file)])

        assert status == 0
        assert "namespace FromConfig {" in (out_dir / "GameScript.g.hpp").read_text()

    def test_cli_overrides_config(self, scripts_dir, tmp_path):
        """Test that flags take precedence over the config file"""
        out_dir = tmp_path / "out"
        config_file = tmp_path / "lua2bind.yaml"
        config_file.write_text("namespace: FromConfig\n")

        main([str(scripts_dir), "--config", str(config_file), "--namespace", "FromCli",
              "--output-dir", str(out_dir)])

        assert "namespace FromCli {" in (out_dir / "GameScript.g.hpp").read_text()

    def test_lua_dir_filter(self, scripts_dir, tmp_path, capsys):
        """Test that scripts outside --lua-dir are reported"""
        out_dir = tmp_path / "out"

        status = main([str(scripts_dir), "--lua-dir", "Content/lua", "--output-dir", str(out_dir)])

        assert status == 0
        assert "warning LB004:" in capsys.readouterr().err
        assert not (out_dir / "GameScript.g.hpp").exists()

    def test_missing_input(self, tmp_path, capsys):
        """Test that a missing input is an error"""
        status = main([str(tmp_path / "nonexistent.lua")])

        assert status == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_config(self, scripts_dir, tmp_path, capsys):
        """Test that an unusable config file is an error"""
        config_file = tmp_path / "bad.yaml"
        config_file.write_text("- not\n- a mapping\n")

        status = main([str(scripts_dir), "--config", str(config_file)])

        assert status == 1
        assert "Error:" in capsys.readouterr().err

    def test_output_dir_cannot_be_created(self, scripts_dir, tmp_path, capsys):
        """Test that an output path under a regular file is an error"""
        blocker = tmp_path / "blocker"
        blocker.write_text("")

        status = main([str(scripts_dir), "--output-dir", str(blocker / "sub")])

        assert status == 1
        assert "Cannot create output directory" in capsys.readouterr().err

    def test_verbose_summary(self, scripts_dir, tmp_path, capsys):
        """Test verbose output"""
        main([str(scripts_dir), "--output-dir", str(tmp_path / "out"), "--verbose"])

        captured = capsys.readouterr()
        assert "Collected 1 input file(s)" in captured.out
        assert "=== Diagnostics Summary ===" in captured.err

    def test_requires_input(self):
        """Test that at least one input is required"""
        with pytest.raises(SystemExit):
            main([])
