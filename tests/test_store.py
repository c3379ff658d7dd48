# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import json
import os
import stat

import pytest

from streaming_twitter.auth import FileTokenStore, MemoryTokenStore
from streaming_twitter.core import CredentialError, Credentials, StoreError, TokenBundle

BUNDLE = TokenBundle(app=Credentials("a", "b"), user=Credentials("c", "d"))


class TestFileTokenStore:
    def test_empty_path(self):
        with pytest.raises(CredentialError, match="no token file supplied"):
            FileTokenStore("")

    def test_load(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"App": {"Token": "a", "Secret": "b"}}))
        bundle = FileTokenStore(path).load()
        assert bundle.app == Credentials("a", "b")
        assert bundle.user is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(StoreError):
            FileTokenStore(tmp_path / "absent.json").load()

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text("{not json")
        with pytest.raises(StoreError):
            FileTokenStore(path).load()

    @pytest.mark.parametrize("document", ['["App"]', '{"App": "token"}'])
    def test_invalid_structure(self, tmp_path, document):
        path = tmp_path / "tokens.json"
        path.write_text(document)
        with pytest.raises(StoreError):
            FileTokenStore(path).load()

    def test_save_round_trip(self, tmp_path):
        store = FileTokenStore(tmp_path / "tokens.json")
        store.save(BUNDLE)
        assert store.load() == BUNDLE

    def test_save_is_owner_only(self, tmp_path):
        path = tmp_path / "tokens.json"
        FileTokenStore(path).save(BUNDLE)
        assert stat.S_IMODE(os.stat(path).st_mode) == 0o600

    def test_failed_save_keeps_previous_file(self, tmp_path, monkeypatch):
        path = tmp_path / "tokens.json"
        original = json.dumps({"App": {"Token": "a", "Secret": "b"}})
        path.write_text(original)

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", broken_replace)
        with pytest.raises(StoreError):
            FileTokenStore(path).save(BUNDLE)

        assert path.read_text() == original
        assert [p.name for p in tmp_path.iterdir()] == ["tokens.json"]


class TestMemoryTokenStore:
    def test_save_replaces_bundle(self):
        store = MemoryTokenStore()
        assert store.load() == TokenBundle()
        store.save(BUNDLE)
        assert store.load() == BUNDLE
        assert store.saves == 1
