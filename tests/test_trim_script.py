import importlib.util
from pathlib import Path

import numpy as np
import pytest

from wave_fixtures import envelope_signal

SCRIPT_PATH = Path(__file__).resolve().parents[1] / "scripts" / "trim_wave.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("trim_wave", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


main = _load_script().main


@pytest.fixture()
def amplitude_file(tmp_path):
    path = tmp_path / "amps.txt"
    path.write_text("\n".join(str(v) for v in [5, 20, 15, 90, 85, 80, 2, 1, 1, 1, 1, 1, 1]), encoding="utf-8")
    return path


def test_script_prints_envelope_points(amplitude_file, capsys):
    status = main([str(amplitude_file), "--amplitudes", "--threshold", "10"])

    assert status == 0
    assert capsys.readouterr().out.strip() == "start=2 peak=3 end=12"


def test_script_reports_bad_amplitude_file(tmp_path):
    path = tmp_path / "amps.txt"
    path.write_text("loud\n", encoding="utf-8")
    assert main([str(path), "--amplitudes"]) != 0


def test_script_trims_recording(make_wave, breath_amplitudes, tmp_path, capsys):
    source = make_wave("take.wav", envelope_signal(breath_amplitudes))

    status = main([str(source), "--output", str(tmp_path / "final.wav")])

    assert status == 0
    assert capsys.readouterr().out.strip() == str(tmp_path / "final-trimmed.wav")
    assert (tmp_path / "final-trimmed.wav").exists()


def test_script_fails_on_empty_recording(make_wave):
    source = make_wave("empty.wav", np.zeros(0, dtype=np.int16))
    assert main([str(source)]) == 1
    assert not source.with_name("empty-trimmed.wav").exists()


@pytest.mark.parametrize(
    "extra",
    [["--chunk-size", "0"], ["--percent", "1.5"], ["--threshold", "-1"]],
    ids=["zero-chunk", "percent-above-one", "negative-threshold"],
)
def test_script_rejects_invalid_overrides(amplitude_file, capsys, extra):
    assert main([str(amplitude_file), "--amplitudes", *extra]) == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize(
    "content",
    ['{"chunk_size": 0}', '{"unknown": 3}', "{not json"],
    ids=["out-of-range", "unknown-field", "malformed"],
)
def test_script_rejects_invalid_settings_file(amplitude_file, tmp_path, content):
    settings = tmp_path / "settings.json"
    settings.write_text(content, encoding="utf-8")

    assert main([str(amplitude_file), "--amplitudes", "--settings", str(settings)]) == 1


def test_script_reports_missing_settings_file(amplitude_file, tmp_path):
    assert main([str(amplitude_file), "--amplitudes", "--settings", str(tmp_path / "none.json")]) == 1
