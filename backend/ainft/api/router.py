"""
API路由聚合模块
将所有路由统一注册

路由管理规范：
1. 所有路由文件内部使用相对路径
2. 所有前缀统一在router.py中管理
"""

from fastapi import APIRouter

from ainft.api.endpoints import generation, nft, users

api_router = APIRouter()

# ==================== AI生成路由 ====================
api_router.include_router(generation.router, prefix="/generate", tags=["AI生成"])

# ==================== NFT路由 ====================
api_router.include_router(nft.router, prefix="/nft", tags=["NFT"])

# ==================== 用户路由 ====================
api_router.include_router(users.router, prefix="/users", tags=["用户管理"])
