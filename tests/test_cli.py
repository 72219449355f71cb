"""
CLI tests — argument parsing, exit codes and deletion safety.
"""
import logging
import os
import sys
from unittest import mock
import pytest
from keepclean.cli import CLIApplication, main
from keepclean.core.models import HashAlgorithmName, RemovalMode
from keepclean.services.file_service import FileService, DeletionError


class TestArgumentParsing:

    def test_single_dash_flags(self):
        args = CLIApplication.parse_args(["-keep", "/k", "-clean", "/c", "-dry", "-extensions", "jpg,png"])

        assert args.keep == "/k"
        assert args.clean == "/c"
        assert args.dry is True
        assert args.extensions == "jpg,png"

    def test_double_dash_flags(self):
        args = CLIApplication.parse_args(["--keep", "/k", "--clean", "/c", "--extensions=txt"])

        assert args.keep == "/k"
        assert args.clean == "/c"
        assert args.dry is False
        assert args.extensions == "txt"

    def test_defaults(self):
        args = CLIApplication.parse_args(["-keep", "/k", "-clean", "/c"])

        assert args.extensions == ""
        assert args.algorithm == "sha256"
        assert args.min_size == "0"
        assert args.max_size is None
        assert args.trash is False
        assert args.verbose is False
        assert args.quiet is False

    @pytest.mark.parametrize("argv", [
        [],
        ["-keep", "/k"],
        ["-clean", "/c"],
    ])
    def test_missing_required_flags_print_usage_and_fail(self, argv, capsys):
        with pytest.raises(SystemExit) as exc:
            CLIApplication.parse_args(argv)

        assert exc.value.code != 0
        assert "usage:" in capsys.readouterr().err

    def test_invalid_algorithm(self):
        with pytest.raises(SystemExit):
            CLIApplication.parse_args(["-keep", "/k", "-clean", "/c", "--algorithm", "md5"])

    def test_create_params(self):
        app = CLIApplication()
        args = app.parse_args([
            "-keep", "/k", "-clean", "/c", "-extensions", "JPG,.png", "--trash",
            "--algorithm", "xxh128", "--min-size", "1K", "--max-size", "2M",
        ])

        params = app.create_params(args)

        assert params.keep_dir == "/k"
        assert params.clean_dir == "/c"
        assert params.extensions == ["jpg", "png"]
        assert params.removal == RemovalMode.TRASH
        assert params.algorithm == HashAlgorithmName.XXH128
        assert params.min_size_bytes == 1024
        assert params.max_size_bytes == 2 * 1024 * 1024

    def test_create_params_rejects_bad_size(self):
        app = CLIApplication()
        args = app.parse_args(["-keep", "/k", "-clean", "/c", "--min-size", "huge"])

        with pytest.raises(SystemExit) as exc:
            app.create_params(args)

        assert exc.value.code == 1

    def test_create_params_rejects_same_directory(self):
        app = CLIApplication()
        args = app.parse_args(["-keep", "/k", "-clean", "/k"])

        with pytest.raises(SystemExit) as exc:
            app.create_params(args)

        assert exc.value.code == 1


class TestRun:

    def test_live_run_deletes_duplicates(self, trees):
        stats = CLIApplication().run(["-keep", str(trees["keep"]), "-clean", str(trees["clean"])])

        assert stats.duplicate_files == 2
        assert not trees["B"].exists()
        assert not trees["clean_pic"].exists()
        assert trees["C"].exists()
        assert trees["A"].exists()
        assert trees["keep_pic"].exists()

    def test_dry_run_deletes_nothing(self, trees):
        with mock.patch.object(FileService, "remove") as mock_remove:
            stats = CLIApplication().run(["-keep", str(trees["keep"]), "-clean", str(trees["clean"]), "-dry"])

        mock_remove.assert_not_called()
        assert stats.duplicate_files == 2
        assert trees["B"].exists()

    def test_extension_filter(self, trees):
        stats = CLIApplication().run([
            "-keep", str(trees["keep"]), "-clean", str(trees["clean"]), "-extensions", "jpg"])

        assert stats.duplicate_files == 1
        assert stats.duplicate_bytes == 2048
        assert trees["B"].exists()
        assert not trees["clean_pic"].exists()

    def test_trash_flag(self, trees):
        with mock.patch.object(FileService, "move_to_trash") as mock_trash:
            CLIApplication().run([
                "-keep", str(trees["keep"]), "-clean", str(trees["clean"]), "-extensions", "txt", "--trash"])

        mock_trash.assert_called_once_with(str(trees["B"]))
        assert trees["B"].exists()

    def test_summary_is_logged(self, trees, caplog):
        caplog.set_level(logging.INFO, logger="keepclean")

        CLIApplication().run(["-keep", str(trees["keep"]), "-clean", str(trees["clean"]), "-extensions", "txt"])

        assert "found 1 duplicate files with total size 10 (0.00 MB / 0.00 GB)" in caplog.text

    def test_zero_duplicates_is_success(self, temp_dir):
        keep = temp_dir / "keep"
        clean = temp_dir / "clean"
        keep.mkdir()
        clean.mkdir()

        stats = CLIApplication().run(["-keep", str(keep), "-clean", str(clean)])

        assert stats.duplicate_files == 0

    def test_missing_root_exits_with_failure(self, trees, temp_dir):
        with pytest.raises(SystemExit) as exc:
            CLIApplication().run(["-keep", str(temp_dir / "missing"), "-clean", str(trees["clean"])])

        assert exc.value.code == 1
        assert trees["B"].exists()

    def test_unlistable_root_exits_with_failure(self, trees, monkeypatch):
        original_scandir = os.scandir
        clean_root = str(trees["clean"])

        def denying_scandir(path="."):
            if os.fspath(path) == clean_root:
                raise PermissionError(13, "Permission denied", clean_root)
            return original_scandir(path)

        monkeypatch.setattr(os, "scandir", denying_scandir)

        with pytest.raises(SystemExit) as exc:
            CLIApplication().run(["-keep", str(trees["keep"]), "-clean", clean_root])

        assert exc.value.code == 1

    def test_deletion_failure_exits_immediately(self, trees):
        with mock.patch.object(FileService, "delete_file", side_effect=DeletionError("error removing x")) as mock_delete:
            with pytest.raises(SystemExit) as exc:
                CLIApplication().run(["-keep", str(trees["keep"]), "-clean", str(trees["clean"])])

        assert exc.value.code == 1
        assert mock_delete.call_count == 1

    def test_verbose_sets_debug_level(self, trees):
        app = CLIApplication()
        app.run(["-keep", str(trees["keep"]), "-clean", str(trees["clean"]), "-dry", "-v"])

        assert logging.getLogger("keepclean").level == logging.DEBUG

    def test_verbose_progress_goes_through_logger(self, trees, caplog, capsys):
        caplog.set_level(logging.DEBUG, logger="keepclean")

        CLIApplication().run(["-keep", str(trees["keep"]), "-clean", str(trees["clean"]), "-dry", "-v"])

        assert "[Scanning clean] 4 files found" in caplog.text
        assert "[Hashing] 2/2 (100.0%)" in caplog.text
        assert "\r" not in capsys.readouterr().err

    def test_quiet_sets_warning_level(self, trees):
        app = CLIApplication()
        app.run(["-keep", str(trees["keep"]), "-clean", str(trees["clean"]), "-dry", "-q"])

        assert logging.getLogger("keepclean").level == logging.WARNING


class TestMain:

    def test_main_uses_sys_argv(self, trees):
        with mock.patch.object(sys, "argv", [
            "keepclean", "-keep", str(trees["keep"]), "-clean", str(trees["clean"]), "-dry"
        ]):
            main()

        assert trees["B"].exists()

    def test_main_keyboard_interrupt(self):
        with mock.patch.object(CLIApplication, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc:
                main()

        assert exc.value.code == 130

    def test_main_unexpected_error(self, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, "run", side_effect=ValueError("bad")):
            with pytest.raises(SystemExit) as exc:
                main()

        assert exc.value.code == 1
