"""
日志消息模板模块
生成、固定、钱包和铸造各阶段的日志消息集中在这里
"""

from typing import Dict, Any


class LogMessages:
    """日志消息模板类"""

    OPERATION_SUCCESS = "操作成功完成: {operation_name}"

    # ==================== Replicate图片生成 ====================
    GENERATION_START = "开始生成图片"
    GENERATION_SUCCESS = "图片生成成功"
    GENERATION_FAILED = "图片生成失败"
    PREDICTION_CREATED = "预测任务已创建: {prediction_id}"
    PREDICTION_STATUS = "预测任务状态: {status}"
    PREDICTION_TIMEOUT = "预测任务轮询超时: {prediction_id}"

    # ==================== Pinata固定 ====================
    PIN_IMAGE_START = "开始上传图片到Pinata"
    PIN_IMAGE_SUCCESS = "图片已固定到IPFS"
    PIN_METADATA_START = "开始上传元数据到Pinata"
    PIN_METADATA_SUCCESS = "元数据已固定到IPFS"
    PIN_FAILED = "Pinata上传失败"

    # ==================== 钱包会话 ====================
    WALLET_CONNECT_START = "开始连接钱包"
    WALLET_CONNECT_SUCCESS = "钱包已连接: {address}"
    WALLET_CONNECT_FAILED = "钱包连接失败"
    WALLET_SWITCH_CHAIN = "切换到目标网络: {chain_id}"
    WALLET_ADD_CHAIN = "钱包未识别目标网络，尝试添加: {chain_id}"
    WALLET_DISCONNECTED = "钱包已断开"

    # ==================== 铸造 ====================
    MINT_START = "开始铸造NFT"
    MINT_SUBMITTED = "铸造交易已提交: {tx_hash}"
    MINT_SUCCESS = "NFT铸造成功: token_id={token_id}"
    MINT_FAILED = "NFT铸造失败"
    MINT_GAS_FALLBACK = "Gas估算失败，使用固定Gas上限重试: {gas_limit}"

    # ==================== 数据库 ====================
    DB_QUERY_SUCCESS = "数据库查询成功"
    DB_QUERY_FAILED = "数据库查询失败"
    DB_UPDATE_SUCCESS = "数据库更新成功"
    DB_UPDATE_FAILED = "数据库更新失败"

    @classmethod
    def format_message(cls, message_template: str, **kwargs: Any) -> str:
        return message_template.format(**kwargs)

    @classmethod
    def get_structured_data(cls, **kwargs: Any) -> Dict[str, Any]:
        """日志extra字段"""
        return kwargs


log_messages = LogMessages()
