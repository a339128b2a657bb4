"""Tests for structured logging output."""

import pytest
import structlog

from dex.errors import MustSendSomeTokens
from dex.log import configure_logging
from dex.types import short
from tests.helpers import ETHER, USER, make_pool


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestLogging:
    def test_swap_is_logged(self, capsys):
        configure_logging()
        pool = make_pool(100 * ETHER, 100 * ETHER)
        capsys.readouterr()

        pool.swap_token_one_for_two(ETHER, sender=USER)

        captured = capsys.readouterr()
        assert "swap" in captured.out
        assert short(pool.address) in captured.out

    def test_revert_is_logged_with_reason(self, capsys):
        configure_logging()
        pool = make_pool(100 * ETHER, 100 * ETHER)
        capsys.readouterr()

        with pytest.raises(MustSendSomeTokens):
            pool.swap_token_one_for_two(0, sender=USER)

        captured = capsys.readouterr()
        assert "transaction_reverted" in captured.out
        assert "Pool__MustSendSomeTokens" in captured.out

    def test_debug_level_filtering(self, capsys):
        configure_logging(debug=False)
        make_pool(ETHER, ETHER)
        assert "contract_deployed" not in capsys.readouterr().out

        configure_logging(debug=True)
        make_pool(ETHER, ETHER)
        assert "contract_deployed" in capsys.readouterr().out
