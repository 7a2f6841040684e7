"""
Tests for the oleificio-generate command line.
"""

import json

from oleificio_sim.cli import main, parse_args
from oleificio_sim.constants import MACHINES
from oleificio_sim.models import STREAMS


class TestParseArgs:
    def test_defaults(self):
        args = parse_args([])
        assert args.config is None
        assert args.seed is None
        assert str(args.output) == "season.json"
        assert not args.validate_only
        assert not args.skip_validation


class TestMain:
    def test_writes_dataset(self, tmp_path, capsys):
        output = tmp_path / "out" / "season.json"
        code = main(["--seed", "42", "--output", str(output), "--quiet"])
        assert code == 0

        data = json.loads(output.read_text())
        assert set(data) == set(STREAMS)
        assert len(data["environmental"]) == 123
        assert data["environmental"][0]["timestamp"] == "2024-10-01"
        assert "quality_certification" in data["quality"][0]
        assert list(data["machine_status"][0]["machine_statuses"]) == list(MACHINES)

        out = capsys.readouterr().out
        assert "Season summary" in out
        assert "[PASS]" in out
        assert "Success!" in out

    def test_validate_only_writes_nothing(self, tmp_path):
        output = tmp_path / "season.json"
        code = main(["--seed", "1", "--output", str(output), "--validate-only", "--quiet"])
        assert code == 0
        assert not output.exists()

    def test_skip_validation(self, tmp_path, capsys):
        output = tmp_path / "season.json"
        assert main(["--seed", "1", "--output", str(output), "--skip-validation", "--quiet"]) == 0
        assert "Validation skipped." in capsys.readouterr().out

    def test_config_file(self, tmp_path):
        config = tmp_path / "season.yaml"
        config.write_text("seed: 3\nseason_start: 2024-11-01\nseason_end: 2024-11-10\n")
        output = tmp_path / "season.json"
        assert main(["--config", str(config), "--output", str(output), "--quiet"]) == 0
        assert len(json.loads(output.read_text())["environmental"]) == 10

    def test_bad_config_returns_2(self, tmp_path, capsys):
        config = tmp_path / "season.yaml"
        config.write_text("season_start: 2025-01-31\nseason_end: 2024-10-01\n")
        assert main(["--config", str(config), "--validate-only"]) == 2
        assert "Configuration error" in capsys.readouterr().err
