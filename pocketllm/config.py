from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    hf_token: str = ""
    device: str = "cpu"
    model_cache_dir: str = "/app/models"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    default_summary_model: str = "distilgpt2"
    default_command_model: str = "qwen2.5-coder"

    input_token_min: int = 0
    input_token_max: int = 1000
    output_token_max: int = 80

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


settings = Settings()
