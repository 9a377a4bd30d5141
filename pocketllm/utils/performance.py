import time
from typing import Dict, List, Union

from pocketllm.models.model_info import PerformanceMetrics
from pocketllm.utils.gpu_utils import get_memory_usage_bytes


class PerformanceMonitor:
    """Wall-clock and memory sampler for one load or inference at a time.

    Measurements do not nest: calling ``start_measurement`` again before
    ``end_measurement`` replaces the pending start point.
    """

    def __init__(self):
        self._start_time = 0.0
        self._memory_before = 0

    def start_measurement(self) -> None:
        self._start_time = time.perf_counter()
        self._memory_before = get_memory_usage_bytes()

    def end_measurement(self) -> PerformanceMetrics:
        end_time = time.perf_counter()
        memory_after = get_memory_usage_bytes()
        return PerformanceMetrics(
            load_time=0.0,
            inference_time=(end_time - self._start_time) * 1000,
            memory_usage=memory_after - self._memory_before,
        )

    @staticmethod
    def calculate_tokens_per_second(tokens: int, time_ms: float) -> float:
        return tokens / (time_ms / 1000) if time_ms > 0 else 0

    @staticmethod
    def get_system_requirements() -> Dict[str, Union[str, List[str]]]:
        return {
            "min_ram": "4GB",
            "recommended_ram": "8GB",
            "min_storage": "3GB",
            "supported_runtimes": ["CPython 3.9+", "PyTorch 2.1+", "CUDA 11.8+ (optional)"],
        }
