"""
MLflow追踪器模块
每次图片生成记录为一个run：提供商、模型、提示词长度、耗时和是否成功
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import mlflow

from ainft.core.config import settings
from ainft.core.log_utils import get_logger

logger = get_logger(__name__)


class MLflowTracker:
    """MLflow追踪器，enable_mlflow 关闭时所有操作都是空操作"""

    def __init__(self):
        self.is_initialized = False

    def _select_experiment(self) -> None:
        name = settings.mlflow_experiment_name
        if mlflow.get_experiment_by_name(name) is None:
            mlflow.create_experiment(name)
        mlflow.set_experiment(name)

    def initialize(self) -> bool:
        if self.is_initialized:
            return True
        if not settings.enable_mlflow:
            logger.info("MLflow追踪已被禁用")
            return False

        try:
            mlflow.set_tracking_uri(settings.mlflow_tracking_uri)
        except Exception as e:
            logger.error("MLflow追踪器初始化失败", exception=e, tracking_uri=settings.mlflow_tracking_uri)
            return False

        try:
            self._select_experiment()
        except Exception as e:
            # 实验不可用时仍记录到默认实验
            logger.warning("MLflow实验设置失败", reason=str(e), experiment=settings.mlflow_experiment_name)

        self.is_initialized = True
        logger.info("MLflow追踪器初始化成功", tracking_uri=settings.mlflow_tracking_uri)
        return True

    @contextmanager
    def start_run(self, run_name: Optional[str] = None, tags: Optional[Dict[str, Any]] = None) -> Iterator[Any]:
        """打开一个run，无法追踪时产出None"""
        if not self.initialize():
            yield None
            return

        try:
            run = mlflow.start_run(run_name=run_name, tags=tags)
        except Exception as e:
            logger.error("启动MLflow运行失败", exception=e, run_name=run_name)
            run = None

        try:
            yield run
        finally:
            if run is not None:
                try:
                    mlflow.end_run()
                except Exception as e:
                    logger.warning("结束MLflow运行时出错", reason=str(e))

    def log_generation(self, params: Dict[str, Any], duration: float, success: bool) -> None:
        """记录一次生成调用，追踪失败不影响生成结果"""
        try:
            mlflow.log_params(params)
            mlflow.log_metrics({
                "duration_seconds": duration,
                "success": 1.0 if success else 0.0,
            })
        except Exception as e:
            logger.warning("记录MLflow数据失败", reason=str(e))


mlflow_tracker = MLflowTracker()


def get_mlflow_tracker() -> MLflowTracker:
    return mlflow_tracker


def ensure_mlflow_initialized() -> bool:
    """启动时调用，返回追踪是否可用"""
    return get_mlflow_tracker().initialize()
