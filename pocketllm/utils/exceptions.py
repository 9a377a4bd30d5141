class PocketLLMException(Exception):
    pass


class ModelNotLoadedError(PocketLLMException):
    def __init__(self):
        super().__init__("No model loaded. Please load a model first.")


class UnknownModelError(PocketLLMException):
    def __init__(self, model_key: str):
        self.model_key = model_key
        super().__init__(f"Model {model_key} not found")


class ModelLoadError(PocketLLMException):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class DownloadError(PocketLLMException):
    def __init__(self, model_id: str, reason: str):
        self.model_id = model_id
        super().__init__(f"Failed to download {model_id}: {reason}")
