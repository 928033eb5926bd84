"""
CLI tests - drive the marketplace through the click commands.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner

from artmarket.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path, monkeypatch):
    """Run a command against a SQLite store in tmp_path; return (exit_code, stdout)."""
    monkeypatch.chdir(tmp_path)
    data_dir = str(tmp_path / "data")

    def _invoke(*args, caller=None):
        base = ["--data-dir", data_dir]
        if caller:
            base += ["--caller", caller]
        result = runner.invoke(cli, base + list(args))
        return result.exit_code, result.stdout

    return _invoke


def _json(output):
    return json.loads(output)


def test_full_auction_via_cli(invoke):
    code, out = invoke("artist", "create", "--name", "Seller", "--wallet", "a" * 64,
                       "--email", "seller@example.com", caller="seller")
    assert code == 0
    seller = _json(out)

    code, out = invoke("artist", "create", "--name", "Buyer", "--wallet", "b" * 64,
                       "--email", "buyer@example.com", caller="buyer")
    buyer = _json(out)

    code, out = invoke("artwork", "mint", "--artist", seller["id"], "--title", "Dawn",
                       "--description", "Oil", "--image-url", "https://example.com/d.png")
    artwork = _json(out)

    code, out = invoke("nft", "mint", "--artwork", artwork["id"], "--price", "10")
    token = _json(out)
    assert token["owner_ids"] == [seller["id"]]
    assert token["status"] == "Pending"

    code, out = invoke("auction", "create", token["id"], caller="seller")
    auction = _json(out)
    assert auction["creator"] == "seller"

    code, out = invoke("auction", "bid", auction["id"], "--bidder", buyer["id"], "--amount", "25")
    assert code == 0
    assert _json(out)["highest_bid"] == 25

    code, _ = invoke("auction", "finalize", auction["id"], caller="someone-else")
    assert code == 1

    code, out = invoke("auction", "finalize", auction["id"], caller="seller")
    assert code == 0
    tx = _json(out)
    assert (tx["buyer_id"], tx["seller_id"], tx["price"]) == (buyer["id"], "seller", 25)

    code, out = invoke("tx", "show", tx["id"])
    assert _json(out)["id"] == tx["id"]

    code, out = invoke("nft", "show", token["id"])
    assert _json(out)["status"] == "Completed"

    code, out = invoke("auction", "completed")
    assert [a["id"] for a in _json(out)] == [auction["id"]]


def test_not_found_exits_nonzero(invoke):
    code, _ = invoke("auction", "show", "missing")
    assert code == 1


def test_invalid_artist_exits_nonzero(invoke):
    code, _ = invoke("artist", "create", "--name", "X", "--wallet", "nothex", "--email", "x@example.com")
    assert code == 1


def test_demo(runner):
    result = runner.invoke(cli, ["demo"])
    assert result.exit_code == 0
    assert "Demo complete" in result.stdout
    assert "Unauthorized" in result.stdout


def test_stdout_is_pure_json_in_a_real_process(tmp_path):
    """Log records go to stderr, so stdout can be piped straight into a JSON parser."""
    repo_root = Path(__file__).resolve().parents[2]
    env = {k: v for k, v in os.environ.items() if not k.startswith("ARTMARKET_")}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(repo_root), env.get("PYTHONPATH")]))

    proc = subprocess.run(
        [
            sys.executable, "-m", "artmarket.cli.main",
            "--data-dir", str(tmp_path / "data"), "--caller", "seller",
            "artist", "create", "--name", "Seller", "--wallet", "a" * 64,
            "--email", "seller@example.com",
        ],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        timeout=60,
    )

    assert proc.returncode == 0, proc.stderr
    assert json.loads(proc.stdout)["owner"] == "seller"
    assert "StorageManager initialized" in proc.stderr
