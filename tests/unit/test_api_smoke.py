"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health and GET / report liveness and file count
2. POST /upload stores a file and returns its index and the new root
3. GET /download/{index} returns the raw bytes
4. GET /proof/{index} returns a proof that verifies against /root
5. Out-of-range indexes and bad uploads return structured errors
"""

import inspect

import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.routes.files import upload_file
from core.config.runtime import RuntimeConfig
from core.crypto.hashing import EMPTY_ROOT, digest_from_hex, sha256, to_hex
from core.merkle.merkle_proofs import MerkleProof, verify_proof
from core.merkle.merkle_tree import MerkleTree
from core.store import BlobStore


def upload(client: TestClient, data: bytes, filename: str = "file.bin"):
    return client.post(
        "/upload",
        params={"filename": filename},
        files={"file": (filename, data, "application/octet-stream")},
    )


class TestHealth:
    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "merkle-vault-api"
        assert data["file_count"] == 0

    def test_root_path_is_health(self, api_client, store):
        store.append(b"x")
        response = api_client.get("/")

        assert response.status_code == 200
        assert response.json()["file_count"] == 1


class TestUpload:
    def test_upload_returns_index_and_root(self, api_client, store):
        response = upload(api_client, b"hello world", "hello.txt")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["file_index"] == 0
        assert data["filename"] == "hello.txt"
        assert data["size"] == len(b"hello world")
        assert data["root"] == to_hex(sha256(b"hello world"))
        assert store.get_name(0) == "hello.txt"

    def test_upload_root_commits_to_every_blob_so_far(self, api_client):
        blobs = [f"doc {i}".encode() for i in range(5)]
        for i, blob in enumerate(blobs):
            data = upload(api_client, blob).json()
            assert data["file_index"] == i
            assert data["root"] == to_hex(MerkleTree.build(blobs[: i + 1]).root)

    def test_upload_handler_is_synchronous(self):
        """The O(n) rebuild runs in the threadpool, not on the event loop."""
        assert not inspect.iscoroutinefunction(upload_file)

    def test_indices_increase(self, api_client):
        indices = [upload(api_client, f"f{i}".encode()).json()["file_index"] for i in range(4)]
        assert indices == [0, 1, 2, 3]

    def test_filename_falls_back_to_part_name(self, api_client):
        response = api_client.post(
            "/upload",
            files={"file": ("from-part.txt", b"data", "text/plain")},
        )
        assert response.json()["filename"] == "from-part.txt"

    def test_missing_file_part(self, api_client):
        response = api_client.post("/upload", params={"filename": "x"}, data={"other": "1"})

        assert response.status_code == 400
        data = response.json()
        assert data["ok"] is False
        assert data["error"]["code"] == "MISSING_FILE"

    def test_too_large(self, store):
        config = RuntimeConfig.from_dict({"server": {"max_upload_bytes": 8}})
        client = TestClient(create_app(config=config, store=store))

        response = upload(client, b"123456789")

        assert response.status_code == 413
        assert response.json()["error"]["code"] == "UPLOAD_TOO_LARGE"
        assert store.count == 0

    def test_exactly_at_limit_accepted(self, store):
        config = RuntimeConfig.from_dict({"server": {"max_upload_bytes": 8}})
        client = TestClient(create_app(config=config, store=store))

        assert upload(client, b"12345678").status_code == 200

    def test_empty_file_accepted(self, api_client):
        response = upload(api_client, b"")
        assert response.status_code == 200
        assert response.json()["root"] == to_hex(sha256(b""))


class TestDownload:
    def test_download_returns_bytes(self, api_client):
        payload = bytes(range(256))
        upload(api_client, b"first")
        upload(api_client, payload)

        response = api_client.get("/download/1")

        assert response.status_code == 200
        assert response.content == payload
        assert response.headers["content-type"] == "application/octet-stream"
        assert response.headers["x-file-index"] == "1"

    @pytest.mark.parametrize("index", [0, 5, -1])
    def test_download_out_of_range(self, api_client, index):
        response = api_client.get(f"/download/{index}")

        assert response.status_code == 404
        data = response.json()
        assert data["ok"] is False
        assert data["error"]["code"] == "NOT_FOUND"

    def test_download_non_integer_index(self, api_client):
        assert api_client.get("/download/abc").status_code == 422


class TestProofAndRoot:
    def test_empty_root(self, api_client):
        response = api_client.get("/root")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "root": to_hex(EMPTY_ROOT), "file_count": 0}

    def test_every_proof_verifies_against_root(self, api_client):
        blobs = [f"document {i}".encode() for i in range(5)]
        for blob in blobs:
            upload(api_client, blob)

        root_data = api_client.get("/root").json()
        pinned = digest_from_hex(root_data["root"])
        assert root_data["file_count"] == 5
        assert pinned == MerkleTree.build(blobs).root

        for i, blob in enumerate(blobs):
            data = api_client.get(f"/proof/{i}").json()
            assert data["index"] == i
            assert len(data["proof"]) == len(data["directions"])
            assert data["root"] == root_data["root"]

            proof = MerkleProof.from_dict(data)
            assert verify_proof(blob, proof, pinned)
            assert not verify_proof(blob + b"!", proof, pinned)

    def test_proof_wire_format(self, api_client):
        for blob in (b"a", b"b", b"c", b"d"):
            upload(api_client, blob)

        data = api_client.get("/proof/1").json()

        assert data["proof"][0] == to_hex(sha256(b"a"))
        assert data["directions"] == [False, True]
        assert all(s.startswith("0x") and len(s) == 66 for s in data["proof"])

    def test_proof_out_of_range(self, api_client):
        upload(api_client, b"a")
        response = api_client.get("/proof/1")

        assert response.status_code == 404
        assert response.json()["error"]["details"] == {"index": 1, "file_count": 1}


class TestAppFactory:
    def test_each_app_has_its_own_store(self):
        first = TestClient(create_app(config=RuntimeConfig()))
        second = TestClient(create_app(config=RuntimeConfig()))

        upload(first, b"only in first")

        assert first.get("/root").json()["file_count"] == 1
        assert second.get("/root").json()["file_count"] == 0

    def test_shared_store_is_served(self):
        store = BlobStore()
        store.append(b"preloaded")
        client = TestClient(create_app(config=RuntimeConfig(), store=store))

        assert client.get("/download/0").content == b"preloaded"
