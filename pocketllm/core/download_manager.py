from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from huggingface_hub import snapshot_download
from tqdm.auto import tqdm

from pocketllm.config import Settings, settings as default_settings
from pocketllm.utils.exceptions import DownloadError
from pocketllm.utils.logger import logger

ProgressCallback = Callable[[float], None]


def _progress_tqdm(callback: Optional[ProgressCallback]):
    """Build a tqdm class that forwards the completed fraction to ``callback``."""

    class _ProgressTqdm(tqdm):
        def update(self, n=1):
            result = super().update(n)
            if callback is not None and self.total:
                callback(self.n / self.total)
            return result

    return _ProgressTqdm


class DownloadManager:
    def __init__(self, config: Optional[Settings] = None):
        self._settings = config or default_settings
        self._cache_dir = Path(self._settings.model_cache_dir)
        self._cache_dir.mkdir(parents=True, exist_ok=True)

    def _model_disk_path(self, model_id: str) -> Path:
        safe_name = model_id.replace("/", "--")
        return self._cache_dir / safe_name

    def is_cached(self, model_id: str) -> bool:
        path = self._model_disk_path(model_id)
        return path.exists() and any(path.iterdir())

    def download(
        self, model_id: str, progress_callback: Optional[ProgressCallback] = None
    ) -> str:
        if self.is_cached(model_id):
            logger.info(f"Model {model_id} found in disk cache")
            if progress_callback is not None:
                progress_callback(1.0)
            return str(self._model_disk_path(model_id))

        token = self._settings.hf_token or None
        local_dir = self._model_disk_path(model_id)
        logger.info(f"Starting download: {model_id}")
        try:
            snapshot_download(
                repo_id=model_id,
                local_dir=str(local_dir),
                token=token,
                tqdm_class=_progress_tqdm(progress_callback),
            )
        except Exception as e:
            raise DownloadError(model_id, str(e)) from e
        logger.info(f"Download complete: {model_id}")
        return str(local_dir)

