import struct

import pytest

from slai.cli import load_model_file, main
from slai.metadata import IncorrectMagicNumberError


def _string(text):
    raw = text.encode("utf-8")
    return struct.pack("<Q", len(raw)) + raw


def _gguf_bytes(metadata):
    out = struct.pack("<IIQQ", 0x46554747, 3, 0, len(metadata))
    for key, value in metadata:
        out += _string(key) + struct.pack("<I", 8) + _string(value)
    return out


@pytest.fixture
def llama_file(tmp_path):
    path = tmp_path / "model.gguf"
    path.write_bytes(_gguf_bytes([("general.architecture", "llama")]))
    return path


def test_no_path_exits_cleanly(capsys):
    assert main([]) == 0
    assert "No model file provided, exiting." in capsys.readouterr().out


def test_load_model_file(llama_file):
    gguf = load_model_file(llama_file)
    assert gguf.version == 3
    assert gguf.metadata["general.architecture"].as_string() == "llama"
    assert gguf.tensors == {}


def test_load_model_file_bad_magic(tmp_path):
    path = tmp_path / "bad.gguf"
    path.write_bytes(struct.pack("<IIQQ", 0x12345678, 3, 0, 0))
    with pytest.raises(IncorrectMagicNumberError):
        load_model_file(path)


def test_main_reports_architecture(llama_file, capsys):
    assert main([str(llama_file)]) == 0
    out = capsys.readouterr().out
    assert "Model architecture: llama" in out
    assert "GGUF model loaded in" in out


def test_main_inspect_prints_metadata(llama_file, capsys):
    assert main([str(llama_file), "--inspect"]) == 0
    out = capsys.readouterr().out.splitlines()
    expected = list(load_model_file(llama_file).metadata_debug_strings())
    assert all(line in out for line in expected)
    assert len(expected) == 1


def test_main_unknown_architecture(tmp_path, capsys):
    path = tmp_path / "other.gguf"
    path.write_bytes(_gguf_bytes([("general.architecture", "mamba")]))
    assert main([str(path)]) == 1
    assert "Unrecognized model" in capsys.readouterr().err


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.gguf")]) == 1
    assert "error:" in capsys.readouterr().err