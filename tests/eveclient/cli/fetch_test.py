"""Tests for the eveclient.cli.fetch module."""

import hashlib
from pathlib import Path
from unittest.mock import MagicMock, patch

import yaml
from click.testing import CliRunner

from eveclient.cli import cli

_DEFAULT_HOST = "https://binaries.eveonline.com"


def _md5(content: bytes) -> str:
    """Compute the uppercase MD5 hex digest for test data."""
    return hashlib.md5(content).hexdigest().upper()


def _serve_build(transport, host: str, files: dict[str, bytes], *, code: str = "TQ") -> None:
    """Serve build info, manifest and content for the given files."""
    transport.serve(f"{host}/eveclient_{code}.json", '{"build":"777"}')
    lines = [f"app:/{name},x/{name},{_md5(content)}\r\n" for name, content in files.items()]
    transport.serve(f"{host}/eveonline_777.txt", "".join(lines))
    for name, content in files.items():
        transport.serve(f"{host}/x/{name}", content)


class TestFetchDownloads:
    """Files are downloaded into TARGET_DIR."""

    @patch("eveclient.downloader.HTTPTransport")
    def test_downloads(self, mock_transport_cls: MagicMock, tmp_path: Path, fake_transport):
        mock_transport_cls.return_value = fake_transport
        _serve_build(fake_transport, _DEFAULT_HOST, {"a.txt": b"a", "b.txt": b"b"})

        runner = CliRunner()
        result = runner.invoke(cli, ["fetch", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Done: 0 present, 0 cached, 2 downloaded." in result.output
        assert (tmp_path / "a.txt").read_bytes() == b"a"
        assert fake_transport.closed is True

    @patch("eveclient.downloader.HTTPTransport")
    def test_second_run_downloads_nothing(
        self, mock_transport_cls: MagicMock, tmp_path: Path, fake_transport
    ):
        mock_transport_cls.return_value = fake_transport
        _serve_build(fake_transport, _DEFAULT_HOST, {"a.txt": b"a"})
        runner = CliRunner()
        runner.invoke(cli, ["fetch", str(tmp_path)])

        result = runner.invoke(cli, ["fetch", str(tmp_path)])

        assert result.exit_code == 0
        assert "Done: 1 present, 0 cached, 0 downloaded." in result.output

    @patch("eveclient.downloader.HTTPTransport")
    def test_cache_dir(self, mock_transport_cls: MagicMock, tmp_path: Path, fake_transport):
        mock_transport_cls.return_value = fake_transport
        _serve_build(fake_transport, _DEFAULT_HOST, {"a.txt": b"a"})
        (tmp_path / "cache").mkdir()
        (tmp_path / "cache" / "a.txt").write_bytes(b"a")

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["fetch", str(tmp_path / "target"), "--cache-dir", str(tmp_path / "cache")],
        )

        assert result.exit_code == 0
        assert "1 cached" in result.output
        assert f"{_DEFAULT_HOST}/x/a.txt" not in fake_transport.requests


class TestFetchServerAndConfig:
    """Server, config file and overrides select what we talk to."""

    @patch("eveclient.downloader.HTTPTransport")
    def test_server_by_name(self, mock_transport_cls: MagicMock, tmp_path: Path, fake_transport):
        mock_transport_cls.return_value = fake_transport
        _serve_build(fake_transport, _DEFAULT_HOST, {"a.txt": b"a"}, code="SISI")

        runner = CliRunner()
        result = runner.invoke(cli, ["fetch", str(tmp_path), "-s", "singularity"])

        assert result.exit_code == 0
        assert fake_transport.requests[0] == f"{_DEFAULT_HOST}/eveclient_SISI.json"

    def test_invalid_server(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["fetch", str(tmp_path), "-s", "serenity"])

        assert result.exit_code == 2
        assert "unknown server: serenity" in result.output

    @patch("eveclient.downloader.HTTPTransport")
    def test_config_file_and_overrides(
        self, mock_transport_cls: MagicMock, tmp_path: Path, fake_transport
    ):
        mock_transport_cls.return_value = fake_transport
        _serve_build(fake_transport, "https://mirror.example.com", {"a.txt": b"a"})
        config_path = tmp_path / "config.yaml"
        config_path.write_text(
            yaml.dump({"version": 0, "base_url": "https://ignored.example.com", "timeout": 10})
        )

        runner = CliRunner()
        result = runner.invoke(
            cli,
            [
                "fetch",
                str(tmp_path / "target"),
                "-c",
                str(config_path),
                "--base-url",
                "https://mirror.example.com",
                "--progress",
            ],
        )

        assert result.exit_code == 0, result.output
        mock_transport_cls.assert_called_once()
        kwargs = mock_transport_cls.call_args.kwargs
        assert kwargs["timeout"] == 10.0
        assert kwargs["progress"] is True

    def test_missing_config_file(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["fetch", str(tmp_path), "-c", str(tmp_path / "nope.yaml")])

        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestFetchFailures:
    """Failures map to exit code 1."""

    @patch("eveclient.downloader.HTTPTransport")
    def test_checksum_mismatch(self, mock_transport_cls: MagicMock, tmp_path: Path, fake_transport):
        mock_transport_cls.return_value = fake_transport
        _serve_build(fake_transport, _DEFAULT_HOST, {"a.txt": b"a", "b.txt": b"b", "c.txt": b"c"})
        fake_transport.serve(f"{_DEFAULT_HOST}/x/b.txt", b"tampered")

        runner = CliRunner()
        result = runner.invoke(cli, ["fetch", str(tmp_path)])

        assert result.exit_code == 1
        assert "Done: 0 present, 0 cached, 1 downloaded." in result.output
        assert "Aborted at entry 2/3: checksum mismatch for b.txt" in result.output
        assert (tmp_path / "a.txt").exists()
        assert not (tmp_path / "b.txt").exists()
        assert not (tmp_path / "c.txt").exists()

    @patch("eveclient.downloader.HTTPTransport")
    def test_unreachable_host(self, mock_transport_cls: MagicMock, tmp_path: Path, fake_transport):
        mock_transport_cls.return_value = fake_transport

        runner = CliRunner()
        result = runner.invoke(cli, ["fetch", str(tmp_path)])

        assert result.exit_code == 1
        assert "eveclient_TQ.json failed" in result.output
        assert fake_transport.closed is True
