"""
应用配置管理模块
统一管理所有配置信息，包括环境变量和文件配置
"""

from typing import Any, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

from ainft.utils.config_utils import (
    get_workspace_path, get_config_path, parse_json_config
)

# 未替换的示例值，视同未配置
PLACEHOLDER_VALUES = {
    "PINATA_API_KEY": "your_pinata_api_key_here",
    "PINATA_SECRET_KEY": "your_pinata_secret_key_here",
    "REPLICATE_API_TOKEN": "your_replicate_api_token_here",
}


class Settings(BaseSettings):
    """应用配置类 - 统一管理所有配置信息"""

    # ==================== 基础配置 ====================
    app_name: str = "AI NFT Generator"
    app_version: str = "1.0.0"
    app_debug: bool = False
    app_env: str = "development"

    # ==================== API配置 ====================
    api_prefix: str = "/api"
    project_name: str = "AI NFT Generator API"

    # ==================== 数据库配置 ====================
    # 留空时使用workspace下的SQLite文件
    DATABASE_URL: str = ""
    db_echo: bool = False

    # ==================== Replicate图片生成配置 ====================
    REPLICATE_API_TOKEN: str = ""
    replicate_api_base: str = "https://api.replicate.com/v1"
    replicate_model: str = "black-forest-labs/flux-1.1-pro-ultra"
    replicate_aspect_ratio: str = "3:2"
    replicate_output_format: str = "jpg"
    replicate_safety_tolerance: int = 2
    replicate_image_prompt_strength: float = 0.1
    replicate_request_timeout: int = 30
    replicate_poll_interval: float = 1.0
    # None表示不限制轮询总时长
    replicate_poll_timeout: Optional[float] = 600.0

    # ==================== Pinata IPFS配置 ====================
    PINATA_API_KEY: str = ""
    PINATA_SECRET_KEY: str = ""
    pinata_api_base: str = "https://api.pinata.cloud"
    pinata_gateway_base: str = "https://gateway.pinata.cloud/ipfs"
    pinata_timeout: int = 60
    pinata_image_filename: str = "nft-image.jpg"
    pinata_image_content_type: str = "image/jpeg"
    # 关闭后 /generate 只返回图片URL
    pinning_enabled: bool = True

    # ==================== NFT元数据配置 ====================
    nft_name_prefix: str = "AI NFT"
    nft_generator_trait: str = "AI Generator"

    # ==================== 区块链配置 ====================
    chain_id: int = 11155111
    chain_name: str = "Sepolia"
    chain_currency_name: str = "ETH"
    chain_currency_symbol: str = "ETH"
    chain_currency_decimals: int = 18
    block_explorer_url: str = "https://sepolia.etherscan.io"
    ALCHEMY_API_KEY: str = ""
    # 显式RPC地址优先于Alchemy地址
    SEPOLIA_RPC_URL: str = ""
    CONTRACT_ADDRESS: str = ""
    # 仅服务端铸造使用
    PRIVATE_KEY: str = ""

    # ==================== 铸造配置 ====================
    mint_gas_limit_buffer_percent: int = 20
    mint_gas_price_buffer_percent: int = 20
    mint_confirmations: int = 2
    mint_fallback_gas_limit: int = 500000
    mint_receipt_timeout: int = 180
    mint_confirmation_poll_interval: float = 2.0
    mint_error_max_length: int = 100

    # ==================== 客户端配置 ====================
    backend_url: str = "http://localhost:5000"
    client_request_timeout: int = 300
    client_state_file: str = "client/nft_generation_state.json"
    client_progress_interval: float = 0.5
    client_progress_step: int = 5
    client_progress_cap: int = 90

    # ==================== MLflow配置 ====================
    enable_mlflow: bool = False
    mlflow_tracking_uri: str = "http://localhost:5001"
    mlflow_experiment_name: str = "ai-nft-generator"

    # ==================== 日志配置 ====================
    log_level: str = "INFO"
    log_file: str = "backend.log"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # ==================== 应用服务配置 ====================
    app_port: int = 5000
    app_host: str = "0.0.0.0"

    # ==================== CORS配置 ====================
    cors_origins: List[str] = ["*"]

    # ==================== 验证器 ====================
    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, value: Any) -> Any:
        """解析CORS origins配置，支持JSON字符串"""
        if isinstance(value, str):
            return parse_json_config(value)
        return value

    @field_validator("REPLICATE_API_TOKEN", "PINATA_API_KEY", "PINATA_SECRET_KEY", "PRIVATE_KEY")
    @classmethod
    def strip_secret(cls, value: str) -> str:
        """去除密钥首尾空白和引号"""
        return value.strip().strip('"') if value else value

    @field_validator("replicate_poll_timeout", mode="before")
    @classmethod
    def parse_poll_timeout(cls, value: Any) -> Any:
        """空字符串或非正数表示不限制轮询时长"""
        if value in ("", "none", "None", None):
            return None
        if float(value) <= 0:
            return None
        return value

    # ==================== 计算属性 ====================
    @property
    def async_database_url(self) -> str:
        """构建异步数据库连接URL"""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite+aiosqlite:///{get_workspace_path('ainft.db')}"

    @property
    def sepolia_rpc_endpoint(self) -> str:
        """获取链RPC地址，显式配置优先，其次使用Alchemy"""
        if self.SEPOLIA_RPC_URL:
            return self.SEPOLIA_RPC_URL
        if self.ALCHEMY_API_KEY:
            return f"https://eth-sepolia.g.alchemy.com/v2/{self.ALCHEMY_API_KEY}"
        return ""

    @property
    def chain_id_hex(self) -> str:
        """十六进制链ID，钱包RPC使用该格式"""
        return hex(self.chain_id)

    @property
    def workspace_dir(self) -> str:
        """获取workspace目录路径"""
        return str(get_workspace_path())

    @property
    def absolute_client_state_file(self) -> str:
        """获取客户端持久化状态文件的绝对路径"""
        return str(get_workspace_path(self.client_state_file))

    @property
    def server_minting_enabled(self) -> bool:
        """服务端铸造是否可用"""
        return bool(self.PRIVATE_KEY and self.CONTRACT_ADDRESS and self.sepolia_rpc_endpoint)

    model_config = SettingsConfigDict(
        env_file=get_config_path(".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="allow",
        validate_default=True
    )


def validate_required_settings(config: Settings) -> List[str]:
    """
    检查必需的服务凭据

    Args:
        config: 配置实例

    Returns:
        List[str]: 问题列表，为空表示配置完整
    """
    required = ["REPLICATE_API_TOKEN"]
    if config.pinning_enabled:
        required += ["PINATA_API_KEY", "PINATA_SECRET_KEY"]

    problems = []
    for key in required:
        value = getattr(config, key, "")
        if not value:
            problems.append(f"{key} is missing")
        elif PLACEHOLDER_VALUES.get(key) == value:
            problems.append(f"{key} is not updated with actual value")
    return problems


def get_settings() -> Settings:
    """获取应用配置实例"""
    return Settings()


# 全局配置实例
settings = get_settings()
