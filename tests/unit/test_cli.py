"""
Unit tests for the command-line entry point.
"""

from unittest.mock import MagicMock

import pytest

from zeroex_swap import cli
from zeroex_swap.orchestrator import SwapOutcome, SwapState

ENV_VARS = [
    "PRIVATE_KEY",
    "ZERO_EX_API_KEY",
    "ALCHEMY_HTTP_TRANSPORT_URL",
    "ZERO_EX_API_URL",
    "SWAP_CHAIN",
    "SWAP_SELL_AMOUNT",
    "SWAP_AFFILIATE_FEE_BPS",
    "SWAP_SURPLUS_COLLECTION",
    "SWAP_DRY_RUN",
    "SWAP_HTTP_TIMEOUT",
]

TEST_KEY = "4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No swap variables in os.environ and no .env file in reach."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def env_file(clean_env):
    path = clean_env / "swap.env"
    path.write_text(
        f"PRIVATE_KEY={TEST_KEY}\n"
        "ZERO_EX_API_KEY=test-key\n"
        "ALCHEMY_HTTP_TRANSPORT_URL=http://rpc.invalid\n"
    )
    return path


def test_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.env_file is None
    assert args.amount is None
    assert args.dry_run is False


def test_missing_private_key_exits_2(clean_env, capsys):
    assert cli.main([]) == 2
    assert "Private key is missing." in capsys.readouterr().err


def test_invalid_amount_exits_2(env_file, capsys):
    assert cli.main(["--env-file", str(env_file), "--amount", "-1"]) == 2
    assert "Configuration error" in capsys.readouterr().err


def test_overrides_reach_config(env_file):
    args = cli.build_parser().parse_args(["--env-file", str(env_file), "--amount", "0.05", "--dry-run"])
    config = cli.load_config(args)
    assert config.sell_amount == "0.05"
    assert config.dry_run is True
    assert config.api_key == "test-key"


@pytest.mark.parametrize(
    "state, code",
    [(SwapState.BROADCAST, 0), (SwapState.DRY_RUN, 0), (SwapState.ABORTED, 1)],
)
def test_exit_code_follows_outcome(env_file, monkeypatch, state, code):
    orchestrator_cls = MagicMock()
    orchestrator_cls.return_value.run.return_value = SwapOutcome(state=state)
    monkeypatch.setattr(cli, "SwapOrchestrator", orchestrator_cls)
    monkeypatch.setattr(cli, "ChainClient", MagicMock())

    assert cli.main(["--env-file", str(env_file)]) == code
    orchestrator_cls.return_value.run.assert_called_once_with()


def test_command_line_overrides_fix_bad_environment(env_file, monkeypatch):
    monkeypatch.setenv("SWAP_CHAIN", "ethereum")
    monkeypatch.setenv("SWAP_SELL_AMOUNT", "-5")
    args = cli.build_parser().parse_args(["--env-file", str(env_file), "--chain", "scroll", "--amount", "0.1"])

    config = cli.load_config(args)

    assert config.chain == "scroll"
    assert config.sell_amount == "0.1"


def test_bad_environment_without_override_exits_2(env_file, monkeypatch, capsys):
    monkeypatch.setenv("SWAP_CHAIN", "ethereum")
    assert cli.main(["--env-file", str(env_file)]) == 2
    assert "Unknown chain 'ethereum'" in capsys.readouterr().err
