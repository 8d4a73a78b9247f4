"""
MLflow追踪单元测试
mlflow 模块全部使用mock替换
"""

import pytest
from unittest.mock import MagicMock, patch

from ainft.core.imggen import BaseImageProvider, ImageGenerationResult
from ainft.core.mlflow_tracker import MLflowTracker


class StaticProvider(BaseImageProvider):
    """固定返回结果的提供商"""

    def __init__(self, tracker: MLflowTracker, result: ImageGenerationResult):
        self.mlflow_tracker = tracker
        self.result = result

    async def _generate_image_internal(self, prompt, **kwargs):
        return self.result

    def get_model_name(self) -> str:
        return "test-model"


@pytest.mark.unit
class TestMLflowTracker:
    """MLflowTracker 单元测试类"""

    @patch("ainft.core.mlflow_tracker.settings")
    def test_disabled(self, mock_settings):
        mock_settings.enable_mlflow = False
        tracker = MLflowTracker()

        assert tracker.initialize() is False
        with tracker.start_run(run_name="x") as run:
            assert run is None

    @patch("ainft.core.mlflow_tracker.mlflow")
    @patch("ainft.core.mlflow_tracker.settings")
    def test_initialize_creates_experiment(self, mock_settings, mock_mlflow):
        mock_settings.enable_mlflow = True
        mock_settings.mlflow_experiment_name = "ai-nft-generator"
        mock_mlflow.get_experiment_by_name.return_value = None

        assert MLflowTracker().initialize() is True

        mock_mlflow.create_experiment.assert_called_once_with("ai-nft-generator")
        mock_mlflow.set_experiment.assert_called_once_with("ai-nft-generator")

    @pytest.mark.asyncio
    async def test_untraced_generation(self):
        tracker = MLflowTracker()
        result = ImageGenerationResult(success=True, image_url="https://img.test/a.jpg")

        assert await StaticProvider(tracker, result).generate_image("p") is result

    @pytest.mark.asyncio
    @patch("ainft.core.mlflow_tracker.mlflow")
    async def test_traced_generation_logs_params_and_metrics(self, mock_mlflow):
        tracker = MLflowTracker()
        tracker.is_initialized = True
        mock_mlflow.start_run.return_value = MagicMock()
        result = ImageGenerationResult(success=False, error_message="Prediction failed: Unknown error")

        assert await StaticProvider(tracker, result).generate_image("a robotic turtle") is result

        params = mock_mlflow.log_params.call_args.args[0]
        assert params == {"provider": "StaticProvider", "model": "test-model", "prompt_length": 16}
        assert mock_mlflow.log_metrics.call_args.args[0]["success"] == 0.0
        mock_mlflow.end_run.assert_called_once()
