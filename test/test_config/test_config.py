from pathlib import Path

from busroute.config import Config
from test import BRTestCase


class TestConfig(BRTestCase):
    @classmethod
    def setUpClass(cls: BRTestCase, **kwargs) -> None:
        kwargs = {"create_temp_dir": True, "disable_logging": True}
        super().setUpClass(**kwargs)

    def _write_config(self, name: str, content: str) -> Path:
        path = self.temp_path.joinpath(name)
        with open(path, "w", encoding="utf-8") as fil:
            fil.write(content)
        return path

    def test_default_config(self) -> None:
        self.assertTrue(Config.default_config_path.exists())
        self.assertEqual("", Config.filename)
        self.assertEqual("route.csv", Config.route_file)
        self.assertEqual(6, Config.float_precision)
        self.assertEqual("WARNING", Config.log_level)
        self.assertFalse(Config.non_interactive)
        self.assertFalse(Config.sample_route)
        self.assertEqual(5, len(Config.sample_stops))
        self.assertEqual(["Central Station", 12, 2.5, 6.0],
                         Config.sample_stops[0])

    def test_load_config(self) -> None:
        path = self._write_config(
            "custom.yaml", "float_precision: 3\nlog_level: info\n")
        self.assertTrue(Config.load_config(path))
        self.assertEqual(3, Config.float_precision)
        self.assertEqual("INFO", Config.log_level)
        # Other values are untouched.
        self.assertEqual("route.csv", Config.route_file)

    def test_load_config__invalid(self) -> None:
        contents = ["unknown_key: 3\n", "float_precision: 20\n",
                    "non_interactive: 'yes'\n", "log_level: [\n"]
        for i, content in enumerate(contents):
            with self.subTest(content=content):
                path = self._write_config(f"invalid_{i}.yaml", content)
                self.assertFalse(Config.load_config(path))

    def test_load_config__missing_file(self) -> None:
        self.assertFalse(
            Config.load_config(self.temp_path.joinpath("missing.yaml")))

    def test_load_args(self) -> None:
        path = self._write_config("args.yaml", "route_file: other.csv\n")
        Config.load_args({"config": [str(path)], "float_precision": 2,
                          "filename": None, "non_interactive": True})
        self.assertEqual("other.csv", Config.route_file)
        self.assertEqual(2, Config.float_precision)
        self.assertEqual("", Config.filename)
        self.assertTrue(Config.non_interactive)

    def test_load_args__invalid(self) -> None:
        with self.assertRaises(SystemExit):
            Config.load_args({"float_precision": -1})
        with self.assertRaises(SystemExit):
            Config.load_args({"log_level": "verbose"})

    def test_str(self) -> None:
        string = str(Config)
        for name in Config.properties:
            self.assertIn(name, string)
