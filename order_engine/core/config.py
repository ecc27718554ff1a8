import os
import re
from dotenv import load_dotenv

# Carrega o .env da raiz do projeto
load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./order_engine.db")
ENV = os.getenv("ENVIRONMENT", os.getenv("ENV", "dev"))
ENV_NORMALIZED = ENV.strip().lower()
IS_TEST = ENV_NORMALIZED == "test"
IS_DEV = ENV_NORMALIZED in {"dev", "development", "local"}
IS_STAGE = ENV_NORMALIZED in {"stage", "staging", "homolog"}
IS_PROD = ENV_NORMALIZED in {"prod", "production"}


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# CORS
_cors_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS = [origin.strip() for origin in _cors_env.split(",") if origin.strip() and origin.strip() != "*"]

if not CORS_ORIGINS and IS_DEV:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

_cors_origin_regex_env = os.getenv("CORS_ALLOW_ORIGIN_REGEX", "").strip()
CORS_ALLOW_ORIGIN_REGEX = _cors_origin_regex_env or None
if CORS_ALLOW_ORIGIN_REGEX:
    re.compile(CORS_ALLOW_ORIGIN_REGEX)

# Pedidos
ORDER_STRICT_STATUS_TRANSITIONS = _env_flag("ORDER_STRICT_STATUS_TRANSITIONS", "1")

# Importação de cardápio
CATALOG_API_BASE_URL = os.getenv(
    "CATALOG_API_BASE_URL",
    "https://marketplace.ifood.com.br/v1/merchants",
).rstrip("/")
CATALOG_IMAGE_BASE_URL = os.getenv(
    "CATALOG_IMAGE_BASE_URL",
    "https://static.ifood-static.com.br/image/upload/t_low/pratos/",
)
CATALOG_HTTP_TIMEOUT_SECONDS = float(os.getenv("CATALOG_HTTP_TIMEOUT_SECONDS", "20"))
CATALOG_FETCH_IMAGES = _env_flag("CATALOG_FETCH_IMAGES", "1")
