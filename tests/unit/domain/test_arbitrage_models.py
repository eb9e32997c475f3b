# nosec B101


import pytest

from domain.models.arbitrage import (
    Denomination,
    ExchangeDetails,
    ExchangeName,
    ExchangeQuote,
    SanityBands,
    join_quotes,
    match_exchange,
)


@pytest.mark.parametrize('market, expected', [
    ('Binance', ExchangeName.BINANCE),
    ('binance', ExchangeName.BINANCE),
    ('Bybit', ExchangeName.BYBIT),
    ('KuCoin', ExchangeName.KUCOIN),
    ('Coinbase Exchange', ExchangeName.COINBASE),
    ('Mercado Bitcoin', None),
    ('', None),
    (None, None),
])
def test_match_exchange(market, expected):
    assert match_exchange(market) == expected


@pytest.mark.parametrize('code, expected', [
    ('BRL', Denomination.BRL),
    ('brl', Denomination.BRL),
    ('USD', Denomination.USD),
    ('USDT', Denomination.USD),
    ('EUR', None),
    (None, None),
])
def test_denomination_from_currency(code, expected):
    assert Denomination.from_currency(code) == expected


def test_direct_brl_outranks_converted_usd():
    assert Denomination.BRL.priority > Denomination.USD.priority


@pytest.mark.parametrize('value, denomination, expected', [
    (5.2, Denomination.BRL, True),
    (1.0, Denomination.BRL, False),
    (0.19, Denomination.BRL, False),
    (1.0, Denomination.USD, True),
    (0.9, Denomination.USD, True),
    (1.1, Denomination.USD, True),
    (1.11, Denomination.USD, False),
    (0.5, Denomination.USD, False),
    (float('nan'), Denomination.BRL, False),
])
def test_default_sanity_bands(value, denomination, expected):
    assert SanityBands().is_plausible(value, denomination) is expected


def test_join_quotes_drops_exchanges_without_details():
    quotes = [
        ExchangeQuote(name=ExchangeName.BINANCE, buy_price=5.2),
        ExchangeQuote(name=ExchangeName.BYBIT, buy_price=None),
        ExchangeQuote(name=ExchangeName.KUCOIN, buy_price=5.3),
    ]
    details = [
        ExchangeDetails(name=ExchangeName.KUCOIN, fee=0.001),
        ExchangeDetails(name=ExchangeName.BINANCE, fee=0.002),
        ExchangeDetails(name=ExchangeName.BYBIT, fee=0.001),
    ]

    exchanges = join_quotes(quotes, details[:2])

    assert [e.name for e in exchanges] == [ExchangeName.BINANCE, ExchangeName.KUCOIN]
    assert exchanges[0].fee == 0.002
    assert exchanges[0].buy_price == 5.2
    assert join_quotes(quotes, details)[1].buy_price is None
