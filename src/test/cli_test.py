import os

from click.testing import CliRunner
from meshwire import VERSION
from meshwire.cli import main


def test_version():
    runner = CliRunner()
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert VERSION in result.output


def test_candidates():
    runner = CliRunner()
    result = runner.invoke(main, ["candidates", "RedisCache", "cache", "--scope", "acme"])
    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "acme.redis_cache",
        "acme.redis_cache_cache",
        "acme.cache_redis_cache",
        "redis_cache",
        "redis_cache_cache",
        "cache_redis_cache",
        "cache",
        os.path.abspath("RedisCache"),
    ]


def test_candidates_rejects_unknown_category():
    runner = CliRunner()
    result = runner.invoke(main, ["candidates", "redis", "database"])
    assert result.exit_code != 0


def test_find_importable_module():
    runner = CliRunner()
    result = runner.invoke(main, ["find", "json", "handler"])
    assert result.exit_code == 0, result.output
    assert result.output.strip() == "handler json: json"


def test_find_missing():
    runner = CliRunner()
    result = runner.invoke(main, ["find", "definitely-missing-xyz", "merger"])
    assert result.exit_code == 1
    assert "Unable to find merger matching definitely-missing-xyz" in result.output
