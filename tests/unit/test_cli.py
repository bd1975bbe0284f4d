"""
CLI Tests

Tests for vault_cli/main.py and its commands, run in-process against the
API through a TestClient:
1. upload pins the locally computed root
2. download verifies against the pin (exit 2 on tampering, 1 if missing)
3. prove + verify work offline
4. config --init / --show
"""

import json

import pytest

from core.client import VaultClient
from core.client.pinning import load_pinned_root, save_pinned_root
from core.crypto.hashing import sha256, to_hex
from core.merkle.merkle_tree import MerkleTree
from vault_cli import config as vault_config
from vault_cli.main import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    create_parser,
    main,
)


@pytest.fixture
def root_file(tmp_path):
    return tmp_path / "root_hash.txt"


@pytest.fixture
def cli(transport, root_file, monkeypatch):
    """Run the CLI with its client routed into the test app."""
    monkeypatch.setattr(
        vault_config,
        "make_client",
        lambda args: VaultClient("http://testserver", http=transport),
    )

    def run(*argv: str) -> int:
        return main(["--root-file", str(root_file), *argv])

    return run


@pytest.fixture
def uploaded(cli, tmp_path):
    """Three files uploaded through the CLI."""
    contents = {"a.txt": b"alpha", "b.txt": b"beta", "c.txt": b"gamma"}
    paths = []
    for name, data in contents.items():
        path = tmp_path / name
        path.write_bytes(data)
        paths.append(str(path))
    assert cli("upload", *paths) == EXIT_SUCCESS
    return contents


class TestParser:
    def test_no_command_is_error(self, capsys):
        assert main([]) == EXIT_RUNTIME_ERROR

    def test_verify_requires_proof(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["verify", "file.txt"])

    def test_download_index_is_int(self):
        args = create_parser().parse_args(["download", "3", "--out", "x"])
        assert args.index == 3
        assert args.out == "x"


class TestUpload:
    def test_upload_pins_local_root(self, capsys, uploaded, root_file):
        expected = MerkleTree.build(list(uploaded.values())).root

        assert load_pinned_root(root_file) == expected
        out = capsys.readouterr().out
        assert "index 0" in out and "index 2" in out
        assert to_hex(expected) in out

    def test_upload_json(self, cli, tmp_path, capsys):
        path = tmp_path / "one.txt"
        path.write_bytes(b"one")

        assert cli("upload", "--json", str(path)) == EXIT_SUCCESS

        data = json.loads(capsys.readouterr().out)
        assert data["indices"] == [0]
        assert data["local_root"] == to_hex(sha256(b"one"))
        assert data["roots_match"] is True

    def test_upload_warns_when_server_holds_more(self, cli, store, tmp_path, capsys):
        store.append(b"someone else's file")
        path = tmp_path / "mine.txt"
        path.write_bytes(b"mine")

        assert cli("upload", str(path)) == EXIT_SUCCESS
        assert "differs" in capsys.readouterr().err

    def test_upload_missing_file(self, cli, tmp_path):
        assert cli("upload", str(tmp_path / "nope.txt")) == EXIT_RUNTIME_ERROR


class TestDownload:
    def test_verified_download(self, cli, uploaded, tmp_path):
        out = tmp_path / "downloaded.txt"

        assert cli("download", "1", "--out", str(out)) == EXIT_SUCCESS
        assert out.read_bytes() == b"beta"

    def test_tampered_download_exits_2(self, cli, uploaded, store, tmp_path, capsys):
        store.replace(1, b"evil")
        out = tmp_path / "downloaded.txt"

        assert cli("download", "1", "--out", str(out)) == EXIT_VERIFICATION_FAILED
        assert not out.exists()
        assert "VERIFICATION FAILED" in capsys.readouterr().err

    def test_unknown_index_exits_1(self, cli, uploaded, tmp_path):
        assert cli("download", "9", "--out", str(tmp_path / "x")) == EXIT_RUNTIME_ERROR

    def test_no_pinned_root_exits_1(self, cli, store, tmp_path):
        store.append(b"x")
        assert cli("download", "0", "--out", str(tmp_path / "x")) == EXIT_RUNTIME_ERROR

    def test_explicit_root_overrides_pin(self, cli, uploaded, tmp_path):
        wrong = to_hex(sha256(b"wrong"))
        out = tmp_path / "x"
        assert cli("download", "0", "--out", str(out), "--root", wrong) == EXIT_VERIFICATION_FAILED


class TestRoot:
    def test_root_prints_server_root(self, cli, store, capsys):
        store.append(b"x")
        assert cli("root") == EXIT_SUCCESS
        assert capsys.readouterr().out.strip() == to_hex(sha256(b"x"))

    def test_root_pin(self, cli, store, root_file):
        store.append(b"x")
        assert cli("root", "--pin") == EXIT_SUCCESS
        assert load_pinned_root(root_file) == sha256(b"x")


class TestProveAndVerify:
    def test_offline_round_trip(self, cli, uploaded, tmp_path):
        proof_path = tmp_path / "proof.json"
        assert cli("prove", "2", "--out", str(proof_path)) == EXIT_SUCCESS

        local = tmp_path / "c.txt"
        assert cli("verify", str(local), "--proof", str(proof_path)) == EXIT_SUCCESS

    def test_verify_detects_modified_file(self, cli, uploaded, tmp_path, capsys):
        proof_path = tmp_path / "proof.json"
        cli("prove", "0", "--out", str(proof_path))
        modified = tmp_path / "modified.txt"
        modified.write_bytes(b"alphA")
        capsys.readouterr()

        assert cli("verify", str(modified), "--proof", str(proof_path), "--json") == EXIT_VERIFICATION_FAILED

        report = json.loads(capsys.readouterr().out)
        assert report["ok"] is False
        assert report["index"] == 0

    def test_verify_rejects_malformed_proof(self, cli, uploaded, tmp_path):
        proof_path = tmp_path / "proof.json"
        proof_path.write_text('{"index": 0, "proof": ["0x00"], "directions": [true]}')

        assert cli("verify", str(tmp_path / "a.txt"), "--proof", str(proof_path)) == EXIT_VERIFICATION_FAILED

    def test_verify_ignores_root_in_proof_file(self, tmp_path, root_file):
        """A root carried by the proof file is never trusted."""
        data = tmp_path / "file.txt"
        data.write_bytes(b"content")
        proof_path = tmp_path / "proof.json"
        proof_path.write_text(json.dumps({
            "index": 0, "proof": [], "directions": [], "root": to_hex(sha256(b"content")),
        }))
        save_pinned_root(root_file, sha256(b"other"))

        code = main(["--root-file", str(root_file), "verify", str(data), "--proof", str(proof_path)])
        assert code == EXIT_VERIFICATION_FAILED

    def test_verify_missing_file(self, tmp_path, root_file):
        code = main([
            "--root-file", str(root_file),
            "verify", str(tmp_path / "nope"), "--proof", str(tmp_path / "nope.json"),
        ])
        assert code == EXIT_RUNTIME_ERROR


class TestConfigCommand:
    def test_init_writes_template(self, tmp_path):
        path = tmp_path / "vault.yaml"
        assert main(["config", "--init", "--path", str(path)]) == EXIT_SUCCESS
        assert "server_url" in path.read_text()

    def test_init_refuses_to_overwrite(self, tmp_path):
        path = tmp_path / "vault.yaml"
        path.write_text("")
        assert main(["config", "--init", "--path", str(path)]) == EXIT_RUNTIME_ERROR

    def test_show_applies_overrides(self, capsys):
        assert main(["--server", "http://elsewhere:1", "config", "--show"]) == EXIT_SUCCESS
        data = json.loads(capsys.readouterr().out)
        assert data["client"]["server_url"] == "http://elsewhere:1"

    def test_missing_config_file(self, tmp_path):
        assert main(["--config", str(tmp_path / "missing.yaml"), "config", "--show"]) == EXIT_RUNTIME_ERROR
