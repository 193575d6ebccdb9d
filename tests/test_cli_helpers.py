from __future__ import annotations

import io

import pytest

import subdmtakeover.cli as cli


def test_read_subdomains_strips_and_skips_blank_lines():
    stream = io.StringIO("\n  blog.example.com  \n\n\t\nshop.example.com\nblog.example.com\n")
    assert cli._read_subdomains(stream) == ["blog.example.com", "shop.example.com", "blog.example.com"]


def test_main_scans_stdin_and_prints_each_result(monkeypatch, capsys):
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO("assets.example.com\n\nwww.example.com\n"))
    seen = {}

    async def fake_run_async(subdomains, result_callback=None, **kwargs):
        seen["subdomains"] = subdomains
        results = [
            {"subdomain": "assets.example.com", "ip": "192.0.2.20", "takeover": True, "provider": "Amazon S3", "stage": "match", "error": None},
            {"subdomain": "www.example.com", "ip": None, "takeover": False, "provider": "", "stage": "resolve", "error": "NXDOMAIN: gone"},
        ]
        for item in results:
            result_callback(item)
        return results

    monkeypatch.setattr(cli, "_run_async", fake_run_async)
    cli.main([])

    assert seen["subdomains"] == ["assets.example.com", "www.example.com"]
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Subdomain takeover detected: assets.example.com by Amazon S3 at IP 192.0.2.20",
        "Error resolving subdomain: NXDOMAIN: gone",
    ]


class _BrokenStdin:
    def __iter__(self):
        raise OSError("Input/output error")


def test_main_exits_nonzero_when_stdin_unreadable(monkeypatch, capsys):
    monkeypatch.setattr(cli.sys, "stdin", _BrokenStdin())

    async def never_called(*args, **kwargs):  # pragma: no cover - must not run
        raise AssertionError("scan must not start")

    monkeypatch.setattr(cli, "_run_async", never_called)
    with pytest.raises(SystemExit) as info:
        cli.main([])
    assert info.value.code == 1
    assert "Error reading subdomains: Input/output error" in capsys.readouterr().err


def test_main_with_empty_stdin_prints_nothing(monkeypatch, capsys):
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO("\n \n"))
    cli.main([])
    assert capsys.readouterr().out == ""


def test_main_end_to_end_reports_takeover_and_resolution_error(monkeypatch, capsys, patch_dns, patch_http, serve_pages):
    patch_dns({"assets.example.com": {"A": ["192.0.2.20"]}})
    patch_http(serve_pages({"assets.example.com": b"<Code>NoSuchBucket</Code>"}))
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO("assets.example.com\ngone.example.com\n"))

    cli.main([])

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2
    takeover = [line for line in out if "assets.example.com" in line]
    assert takeover == ["Subdomain takeover detected: assets.example.com by Amazon S3 at IP 192.0.2.20"]
    gone = [line for line in out if "gone.example.com" in line]
    assert len(gone) == 1
    assert gone[0].startswith("Error resolving subdomain: NXDOMAIN")
    assert "takeover detected" not in gone[0].lower()


def test_main_bad_idna_host_does_not_abort_other_scans(monkeypatch, capsys, patch_dns, patch_http, serve_pages):
    patch_dns(
        {
            "xn--zz.wild.example.com": {"A": ["192.0.2.60"]},
            "assets.example.com": {"A": ["192.0.2.20"]},
        }
    )
    patch_http(serve_pages({"assets.example.com": b"<Code>NoSuchBucket</Code>"}))
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO("xn--zz.wild.example.com\nassets.example.com\n"))

    cli.main([])

    out = capsys.readouterr().out.splitlines()
    assert "Subdomain takeover detected: assets.example.com by Amazon S3 at IP 192.0.2.20" in out
    assert any(line.startswith("Error sending request:") for line in out)
