import tempfile
import unittest
from pathlib import Path
from unittest import mock

from conftest import make_config

from qcwatchdog.local.supervisor.errors import ResolutionError
from qcwatchdog.local.supervisor.resolver import PathResolver, TargetKind


def _touch(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("")
    return path


class TestPathResolver(unittest.TestCase):
    def setUp(self) -> None:
        td = tempfile.TemporaryDirectory()
        self.addCleanup(td.cleanup)
        self.root = Path(td.name)
        self.config = make_config(self.root)
        self.resolver = PathResolver(self.config)
        self.publisher_dir = self.config.PROGRAMS_DIR / "University of Washington"

    def test_explicit_path_is_used_without_other_strategies(self) -> None:
        exe = _touch(self.root / "install" / "AutoQC.exe")
        _touch(self.publisher_dir / "AutoQC.appref-ms")

        with mock.patch.object(self.resolver, "find_app_reference") as find_ref, \
                mock.patch.object(self.resolver, "find_colocated_executable") as find_exe:
            target = self.resolver.resolve(str(exe))

        self.assertEqual(target.path, exe)
        self.assertEqual(target.kind, TargetKind.EXECUTABLE)
        self.assertEqual(target.process_name, "AutoQC")
        find_ref.assert_not_called()
        find_exe.assert_not_called()

    def test_explicit_daily_executable_uses_its_own_process_name(self) -> None:
        exe = _touch(self.root / "install" / "AutoQC-daily.exe")
        target = self.resolver.resolve(f"  {exe}  ")
        self.assertEqual(target.process_name, "AutoQC-daily")

    def test_explicit_path_with_wrong_name_fails_without_fallback(self) -> None:
        other = _touch(self.root / "install" / "Skyline.exe")
        _touch(self.config.BASE_DIR / "AutoQC.exe")

        with mock.patch.object(self.resolver, "find_colocated_executable") as find_exe:
            with self.assertRaises(ResolutionError) as ctx:
                self.resolver.resolve(str(other))
        self.assertIn("Skyline.exe", str(ctx.exception))
        find_exe.assert_not_called()

    def test_explicit_path_that_does_not_exist_fails(self) -> None:
        with self.assertRaises(ResolutionError) as ctx:
            self.resolver.resolve(str(self.root / "missing" / "AutoQC.exe"))
        self.assertIn("does not exist", str(ctx.exception))

    def test_no_argument_falls_back_to_colocated_executable(self) -> None:
        exe = _touch(self.config.BASE_DIR / "AutoQC.exe")
        target = self.resolver.resolve()
        self.assertEqual(target.path, exe)
        self.assertEqual(target.kind, TargetKind.EXECUTABLE)

    def test_no_argument_prefers_application_reference(self) -> None:
        appref = _touch(self.publisher_dir / "AutoQC.appref-ms")
        _touch(self.config.BASE_DIR / "AutoQC.exe")
        target = self.resolver.resolve(None)
        self.assertEqual(target.path, appref)
        self.assertEqual(target.kind, TargetKind.APPLICATION_REFERENCE)
        self.assertEqual(target.process_name, "AutoQC")

    def test_daily_channel_uses_daily_reference_only(self) -> None:
        daily = _touch(self.publisher_dir / "AutoQC-daily.appref-ms")
        _touch(self.publisher_dir / "AutoQC.appref-ms")

        with mock.patch.object(self.resolver, "find_app_reference", wraps=self.resolver.find_app_reference) as find_ref:
            target = self.resolver.resolve("daily")

        self.assertEqual(target.path, daily)
        self.assertEqual(target.process_name, "AutoQC-daily")
        find_ref.assert_called_once_with("AutoQC-daily")

    def test_channel_keyword_is_case_insensitive(self) -> None:
        daily = _touch(self.publisher_dir / "AutoQC-daily.appref-ms")
        self.assertEqual(self.resolver.resolve("Daily").path, daily)

    def test_product_folder_used_when_publisher_folder_is_missing(self) -> None:
        appref = _touch(self.config.PROGRAMS_DIR / "AutoQC" / "AutoQC.appref-ms")
        self.assertEqual(self.resolver.resolve().path, appref)

    def test_product_folder_ignored_when_publisher_folder_exists(self) -> None:
        self.publisher_dir.mkdir(parents=True)
        _touch(self.config.PROGRAMS_DIR / "AutoQC" / "AutoQC.appref-ms")
        self.assertIsNone(self.resolver.find_app_reference("AutoQC"))

    def test_nothing_found_is_a_resolution_error(self) -> None:
        with self.assertRaises(ResolutionError) as ctx:
            self.resolver.resolve()
        self.assertIn("AutoQC.appref-ms", str(ctx.exception))
        self.assertIn("AutoQC.exe", str(ctx.exception))

    def test_unknown_default_channel_is_a_resolution_error(self) -> None:
        self.config.DEFAULT_CHANNEL = "nightly"
        with self.assertRaises(ResolutionError):
            self.resolver.resolve()


if __name__ == "__main__":
    unittest.main()
