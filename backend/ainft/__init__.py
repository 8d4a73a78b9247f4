"""
AI NFT 生成器后端
提示词 -> 图片生成 -> IPFS固定 -> 链上铸造
"""

__version__ = "1.0.0"
