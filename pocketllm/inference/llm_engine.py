from typing import Any, Dict, Optional

import torch
from transformers import pipeline

from pocketllm.config import Settings, settings as default_settings
from pocketllm.core.download_manager import DownloadManager
from pocketllm.inference.base import BaseInferenceEngine, ProgressCallback
from pocketllm.models.model_info import CandidateModel
from pocketllm.utils.gpu_utils import clear_gpu_cache
from pocketllm.utils.logger import logger


class TransformersEngine(BaseInferenceEngine):
    def __init__(
        self,
        candidate: CandidateModel,
        config: Optional[Settings] = None,
        download_manager: Optional[DownloadManager] = None,
    ):
        super().__init__(candidate)
        self._settings = config or default_settings
        self._download_manager = download_manager
        self._pipeline = None

    def load(self, progress_callback: Optional[ProgressCallback] = None) -> None:
        if self._download_manager is None:
            self._download_manager = DownloadManager(self._settings)
        model_path = self._download_manager.download(self.model_id, progress_callback)

        device = self._settings.device
        task = self.candidate.family.pipeline_task
        logger.info(f"Loading {task} pipeline: {self.model_id} from {model_path}")
        dtype = torch.float16 if device == "cuda" else torch.float32
        self._pipeline = pipeline(
            task,
            model=model_path,
            device=device,
            torch_dtype=dtype,
        )
        logger.info(f"Pipeline loaded: {self.model_id}")

    def unload(self) -> None:
        del self._pipeline
        self._pipeline = None
        clear_gpu_cache()
        logger.info(f"Pipeline unloaded: {self.model_id}")

    def generate(self, inputs: Any, params: Dict[str, Any]) -> str:
        with torch.no_grad():
            result = self._pipeline(inputs, **params)

        generated = result[0]["generated_text"]
        # Chat input yields the whole conversation; the reply is the last turn.
        if isinstance(generated, list):
            return generated[-1]["content"]
        return generated
