"""
Tests for CLI commands.

Uses typer's CliRunner against small source trees in tmp_path.
"""

from typer.testing import CliRunner

from modcompile.cli.main import app

runner = CliRunner()


class TestVersion:
    """Tests for --version flag."""

    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "modcompile version" in result.output

    def test_version_short_flag(self):
        result = runner.invoke(app, ["-v"])
        assert result.exit_code == 0
        assert "modcompile version" in result.output


class TestHelp:
    """Tests for help output."""

    def test_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "modcompile" in result.output.lower()

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code == 0
        assert "bundle" in result.output

    def test_subcommand_help(self):
        for command in ("bundle", "each", "deps"):
            result = runner.invoke(app, [command, "--help"])
            assert result.exit_code == 0, command


class TestBundle:
    """Tests for the bundle command."""

    def test_bundle_register(self, project):
        out = project / "out" / "app.js"
        src = project / "src"

        result = runner.invoke(
            app,
            [
                "bundle",
                str(out),
                str(src / "main.js"),
                f"script:{src / 'polyfill.js'}",
                "--modules",
                "register",
                "--project-dir",
                str(project),
            ],
        )

        assert result.exit_code == 0, result.output
        text = out.read_text()
        assert text.index('System.registerModule("../src/lib/helper.js"') < text.index('System.get("../src/main.js");')
        assert text.rstrip().endswith("var polyfilled = true;")
        assert "Wrote" in result.output

    def test_bundle_uses_config_file(self, project):
        (project / "modcompile.yaml").write_text("compile:\n  modules: register\nlogging:\n  level: WARNING\n")
        out = project / "out" / "app.js"

        result = runner.invoke(
            app, ["bundle", str(out), str(project / "src" / "lib" / "helper.js"), "--project-dir", str(project)]
        )

        assert result.exit_code == 0, result.output
        assert 'System.get("../src/lib/helper.js");' in out.read_text()

    def test_bundle_missing_entry_fails(self, project):
        out = project / "out" / "app.js"

        result = runner.invoke(app, ["bundle", str(out), str(project / "src" / "nope.js"), "-d", str(project)])

        assert result.exit_code == 1
        assert not out.exists()

    def test_bundle_undecodable_source_fails_cleanly(self, project):
        (project / "src" / "bad.js").write_bytes(b"\xff\xfe var x;\n")
        out = project / "out" / "app.js"

        result = runner.invoke(app, ["bundle", str(out), "src/bad.js", "-d", str(project)])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert not out.exists()

    def test_bundle_invalid_module_mode(self, project):
        result = runner.invoke(
            app,
            ["bundle", str(project / "o.js"), str(project / "src" / "main.js"), "-m", "bogus", "-d", str(project)],
        )
        assert result.exit_code == 1

    def test_bundle_invalid_config(self, project):
        (project / "modcompile.yaml").write_text("compile: [broken\n")
        result = runner.invoke(
            app, ["bundle", str(project / "o.js"), str(project / "src" / "main.js"), "-d", str(project)]
        )
        assert result.exit_code == 1


class TestEach:
    """Tests for the each command."""

    def test_each_mirrors_entries(self, project):
        build = project / "build"

        result = runner.invoke(
            app,
            ["each", str(build), "src/main.js", "src/lib/util.js", "-d", str(project)],
        )

        assert result.exit_code == 0, result.output
        assert (build / "src" / "main.js").exists()
        assert (build / "src" / "lib" / "util.js").exists()

    def test_each_reports_failures(self, project):
        result = runner.invoke(
            app,
            [
                "each",
                str(project / "build"),
                "src/main.js",
                "src/missing.js",
                "-d",
                str(project),
            ],
        )

        assert result.exit_code == 1
        assert "ok " in result.output


class TestDeps:
    """Tests for the deps command."""

    def test_deps_lists_files(self, project):
        result = runner.invoke(app, ["deps", "app.js", "src/main.js", "-d", str(project)])

        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.splitlines() if line.startswith("app.js: ")]
        assert lines == [
            "app.js: src/main.js",
            "app.js: src/lib/util.js",
            "app.js: src/lib/helper.js",
        ]
        assert not (project / "app.js").exists()
