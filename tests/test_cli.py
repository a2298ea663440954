"""Tests for the command line client."""

from __future__ import annotations

import json
import os
from pathlib import Path
from unittest.mock import MagicMock, patch
from urllib.error import URLError

import pytest

from openphacts.__main__ import build_parser, main

FIXTURES_DIR = Path(__file__).parent / "fixtures"
ASPIRIN = "http://www.conceptwiki.org/concept/38932552-111f-4a4e-a46a-4ed1d7bdf9d5"


def fixture_response(name: str) -> MagicMock:
    response = MagicMock()
    response.__enter__ = MagicMock(return_value=response)
    response.__exit__ = MagicMock(return_value=False)
    response.status = 200
    response.read.return_value = (FIXTURES_DIR / name).read_bytes()
    return response


class TestParser:
    """Tests for argument parsing."""

    def test_command_required(self) -> None:
        """Test that a subcommand is required."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_search_options(self) -> None:
        """Test search arguments."""
        argv = ["search", "adenosine", "--kind", "target", "--limit", "3"]
        args = build_parser().parse_args(argv)
        assert args.query == "adenosine"
        assert args.kind == "target"
        assert args.limit == 3


class TestMain:
    """Tests for main()."""

    def test_version_runs_offline(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that version needs no configuration."""
        assert main(["version"]) == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["title"] == "openphacts"
        assert payload["LDA-version"] == "1.5"

    def test_classify_runs_offline(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test classifying a dataset URI without network access."""
        with patch.dict(os.environ, {}, clear=True):
            code = main(
                ["--env", str(tmp_path / "none.env"), "classify", "http://purl.uniprot.org"]
            )

        assert code == 0
        assert json.loads(capsys.readouterr().out) == {
            "dataset": "http://purl.uniprot.org",
            "source": "uniprot",
        }

    def test_invalid_config(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that configuration errors exit with status 2."""
        with patch.dict(os.environ, {"OPS_TIMEOUT": "never"}, clear=True):
            code = main(["--env", str(tmp_path / "none.env"), "classify", "http://x"])

        assert code == 2
        assert "OPS_TIMEOUT" in capsys.readouterr().err

    @patch("openphacts.transport.urlopen")
    def test_compound(
        self, mock_urlopen: MagicMock, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test printing a merged compound record."""
        mock_urlopen.return_value = fixture_response("compound.json")
        env = {"OPS_APP_ID": "id", "OPS_APP_KEY": "key"}

        with patch.dict(os.environ, env, clear=True):
            code = main(
                ["--env", str(tmp_path / "none.env"), "--lens", "Default", "compound", ASPIRIN]
            )

        assert code == 0
        record = json.loads(capsys.readouterr().out)
        assert record["URI"] == ASPIRIN
        assert record["inchiKey"] == "BSYNRYMUTXBXSQ-UHFFFAOYSA-N"
        assert set(record["provenance"]) == {"conceptwiki", "chembl", "drugbank", "chemspider"}
        assert "_lens=Default" in mock_urlopen.call_args[0][0].full_url

    @patch("openphacts.transport.urlopen")
    def test_transport_failure(
        self, mock_urlopen: MagicMock, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that request failures exit with status 1."""
        mock_urlopen.side_effect = URLError("Name or service not known")

        with patch.dict(os.environ, {}, clear=True):
            code = main(["--env", str(tmp_path / "none.env"), "target", "http://x/1"])

        assert code == 1
        assert "Name or service not known" in capsys.readouterr().err

    @patch("openphacts.transport.urlopen")
    def test_unexpected_shape(
        self, mock_urlopen: MagicMock, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test that a response missing required fields exits with status 1."""
        response = fixture_response("compound.json")
        response.read.return_value = json.dumps({"result": {"items": []}}).encode("utf-8")
        mock_urlopen.return_value = response

        with patch.dict(os.environ, {}, clear=True):
            code = main(["--env", str(tmp_path / "none.env"), "disease", "http://x/1"])

        assert code == 1
        assert "primaryTopic" in capsys.readouterr().err
