"""
Crypto market sentiment: ETF flow proxy, BTC-vs-alts money flow and sector
rotation across well-known coin groups.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from ..config.defaults import CryptoParams
from ..data.models import CryptoAsset, CryptoGlobalMarket

CRYPTO_SECTORS = {
    "Majors": ("bitcoin", "ethereum", "solana", "cardano", "avalanche-2", "polkadot", "chainlink"),
    "DeFi": ("uniswap", "aave", "maker", "lido-dao", "jupiter-exchange-solana", "raydium",
             "curve-dao-token", "compound-governance-token"),
    "Layer 2": ("matic-network", "arbitrum", "optimism", "starknet", "immutable-x"),
    "Memes": ("dogecoin", "shiba-inu", "pepe", "floki", "bonk", "dogwifcoin", "brett"),
    "AI & Data": ("render-token", "fetch-ai", "the-graph", "ocean-protocol", "singularitynet",
                  "bittensor", "near"),
    "Gaming": ("immutable-x", "axie-infinity", "the-sandbox", "gala", "illuvium", "beam-2"),
}


@dataclass(frozen=True)
class CryptoSector:
    """Average 24h performance of a coin group"""
    name: str
    performance_24h: float
    top_coin: str


@dataclass(frozen=True)
class EtfFlowSignal:
    signal: str
    description: str


@dataclass(frozen=True)
class MoneyFlow:
    """Where money is rotating within crypto"""
    direction: str
    signal: str
    btc_vs_alts: str
    defi_tvl_trend: str = "UNKNOWN"


@dataclass(frozen=True)
class FearGreed:
    value: int = 50
    label: str = "Neutral"


@dataclass(frozen=True)
class CryptoSentiment:
    """Complete crypto sentiment surface"""
    btc: CryptoAsset
    eth: CryptoAsset
    top_altcoins: list[CryptoAsset]
    sectors: list[CryptoSector]
    etf_flow: EtfFlowSignal
    money_flow: MoneyFlow
    fear_greed: FearGreed = field(default_factory=FearGreed)
    btc_dominance: float = 0.0
    eth_dominance: float = 0.0
    total_market_cap: float = 0.0
    total_volume_24h: float = 0.0


def etf_flow_signal(btc: CryptoAsset, params: Optional[CryptoParams] = None) -> EtfFlowSignal:
    """
    Proxy spot ETF flows from BTC volume and price action

    Heavy volume (volume / market cap above etf_volume_ratio) with a move
    beyond etf_move_pct reads as a confirmed flow; a larger move on normal
    volume reads as a likely flow.
    """
    params = params or CryptoParams()
    volume_ratio = btc.volume_24h / btc.market_cap if btc.market_cap else 0.0
    change = btc.change_24h

    if volume_ratio > params.etf_volume_ratio and change > params.etf_move_pct:
        return EtfFlowSignal("INFLOW", "High volume + price up suggests strong ETF inflows")
    if volume_ratio > params.etf_volume_ratio and change < -params.etf_move_pct:
        return EtfFlowSignal("OUTFLOW", "High volume + price down suggests ETF outflows")
    if change > params.etf_strong_move_pct:
        return EtfFlowSignal("LIKELY INFLOW", "Strong price action suggests accumulation")
    if change < -params.etf_strong_move_pct:
        return EtfFlowSignal("LIKELY OUTFLOW", "Weak price action suggests distribution")
    return EtfFlowSignal("NEUTRAL", "Normal trading volume")


def money_flow(btc: CryptoAsset, altcoins: Sequence[CryptoAsset],
               defi_trend: str = "UNKNOWN",
               params: Optional[CryptoParams] = None) -> MoneyFlow:
    """Compare BTC's 24h move with the average altcoin move"""
    params = params or CryptoParams()
    alt_average = sum(a.change_24h for a in altcoins) / len(altcoins) if altcoins else 0.0
    change = btc.change_24h
    threshold = params.money_flow_move_pct

    if change > threshold and alt_average > change:
        return MoneyFlow("RISK-ON", "Money flowing into alts - risk appetite increasing",
                         "ALTS OUTPERFORM", defi_trend)
    if change > threshold and alt_average < change:
        return MoneyFlow("BTC ACCUMULATION", "BTC outperforming - flight to quality within crypto",
                         "BTC OUTPERFORMS", defi_trend)
    if change < -threshold and alt_average < change:
        return MoneyFlow("RISK-OFF", "Alts dumping harder - risk-off environment",
                         "ALTS UNDERPERFORM", defi_trend)
    if change < -threshold:
        return MoneyFlow("BROAD SELLING", "Broad market selling pressure",
                         "CORRELATED SELL", defi_trend)
    return MoneyFlow("NEUTRAL", "Balanced flows", "NEUTRAL", defi_trend)


def categorize_sectors(coins: Sequence[CryptoAsset]) -> list[CryptoSector]:
    """
    Average 24h performance per coin group, best group first

    Groups with no coins present are omitted.
    """
    sectors = []
    for name, ids in CRYPTO_SECTORS.items():
        members = [coin for coin in coins if coin.id in ids]
        if not members:
            continue

        average = sum(coin.change_24h for coin in members) / len(members)
        top = max(members, key=lambda coin: coin.change_24h)
        sectors.append(CryptoSector(
            name=name,
            performance_24h=average,
            top_coin=f"{top.symbol.upper()} ({top.change_24h:.1f}%)",
        ))

    return sorted(sectors, key=lambda s: s.performance_24h, reverse=True)


def defi_tvl_trend(sectors: Sequence[CryptoSector], threshold: float = 1.0) -> str:
    """Estimate the DeFi TVL trend from DeFi sector performance"""
    defi = next((s for s in sectors if s.name == "DeFi"), None)
    if defi is None:
        return "UNKNOWN"
    if defi.performance_24h > threshold:
        return "GROWING"
    if defi.performance_24h < -threshold:
        return "DECLINING"
    return "STABLE"


def top_altcoins(coins: Sequence[CryptoAsset], params: Optional[CryptoParams] = None) -> list[CryptoAsset]:
    """Largest coins excluding BTC, ETH and stablecoins"""
    params = params or CryptoParams()
    excluded = {"bitcoin", "ethereum", *params.stablecoin_ids}
    return [coin for coin in coins if coin.id not in excluded][:params.top_altcoins]


def _find_or_empty(coins: Sequence[CryptoAsset], coin_id: str, symbol: str, name: str) -> CryptoAsset:
    return next(
        (coin for coin in coins if coin.id == coin_id),
        CryptoAsset(id=coin_id, symbol=symbol, name=name),
    )


def analyze_crypto_sentiment(coins: Sequence[CryptoAsset],
                             fear_greed: Optional[FearGreed] = None,
                             params: Optional[CryptoParams] = None,
                             global_market: Optional[CryptoGlobalMarket] = None) -> CryptoSentiment:
    """
    Build the crypto sentiment surface from a market-cap ordered coin list

    Missing BTC or ETH entries are replaced by zeroed assets, and missing
    global totals by zeros.
    """
    params = params or CryptoParams()
    global_market = global_market or CryptoGlobalMarket()

    btc = _find_or_empty(coins, "bitcoin", "BTC", "Bitcoin")
    eth = _find_or_empty(coins, "ethereum", "ETH", "Ethereum")
    altcoins = top_altcoins(coins, params)
    sectors = categorize_sectors(coins)

    return CryptoSentiment(
        btc=btc,
        eth=eth,
        top_altcoins=altcoins,
        sectors=sectors,
        etf_flow=etf_flow_signal(btc, params),
        money_flow=money_flow(btc, altcoins, defi_tvl_trend(sectors, params.defi_trend_pct), params),
        fear_greed=fear_greed or FearGreed(),
        btc_dominance=global_market.btc_dominance,
        eth_dominance=global_market.eth_dominance,
        total_market_cap=global_market.total_market_cap,
        total_volume_24h=global_market.total_volume_24h,
    )
