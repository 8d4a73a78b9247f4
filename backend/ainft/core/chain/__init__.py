"""
链上访问模块
钱包会话、合约访问和铸造错误分类
"""

from ainft.core.chain.contract import MintReceipt, NFTContract, get_contract, get_read_provider
from ainft.core.chain.exceptions import *
from ainft.core.chain.mint_errors import MintError, MintErrorKind, MintStage, classify_mint_error, describe_mint_error
from ainft.core.chain.minting import apply_buffer, mint_token
from ainft.core.chain.session import WalletSession
from ainft.core.chain.signer import WalletSigner
from ainft.core.chain.wallet import ChainParameters, InjectedWallet, LocalKeyWallet
