import os

import psutil
import torch

from pocketllm.utils.logger import logger


def initialize_gpu() -> str:
    if torch.cuda.is_available():
        device_name = torch.cuda.get_device_name(0)
        total_mem = torch.cuda.get_device_properties(0).total_memory / (1024 ** 3)
        logger.info(f"GPU detected: {device_name} ({total_mem:.1f} GB)")
        return "cuda"
    logger.warning("No CUDA GPU available, falling back to CPU")
    return "cpu"


def get_memory_usage_bytes() -> int:
    """Current memory footprint: CUDA allocations on GPU hosts, process RSS otherwise."""
    if torch.cuda.is_available():
        return int(torch.cuda.memory_allocated(0))
    try:
        return int(psutil.Process(os.getpid()).memory_info().rss)
    except psutil.Error as e:
        logger.debug(f"Memory sample unavailable: {e}")
        return 0


def clear_gpu_cache():
    if torch.cuda.is_available():
        torch.cuda.empty_cache()
        torch.cuda.synchronize()
        logger.info("GPU cache cleared")
