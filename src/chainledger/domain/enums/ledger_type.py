from enum import Enum


class LedgerType(str, Enum):
    """CoinTracking entry types. The converter only emits Trade, Deposit, Withdrawal,
    Airdrop, Lost and Other Fee; the rest exist for manually authored rows."""

    TRADE = "Trade"
    DEPOSIT = "Deposit"
    WITHDRAWAL = "Withdrawal"
    INCOME = "Income"
    MINING = "Mining"
    AIRDROP = "Airdrop"
    STAKING = "Staking"
    MASTERNODE = "Masternode"
    MINTING = "Minting"
    DIVIDENDS = "Dividends"
    LENDING_INCOME = "Lending Income"
    INTEREST_INCOME = "Interest Income"
    REWARD_BONUS = "Reward / Bonus"
    BOUNTY = "Bounty"
    GIFT_TIP = "Gift / Tip"
    SPEND = "Spend"
    DONATION = "Donation"
    GIFT = "Gift"
    STOLEN = "Stolen"
    LOST = "Lost"
    OTHER_FEE = "Other Fee"
    OTHER_INCOME = "Other Income"
    OTHER_EXPENSE = "Other Expense"
