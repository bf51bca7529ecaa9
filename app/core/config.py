# app/core/config.py

from typing import Any
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# Diretório raiz do projeto (onde fica o arquivo .env).
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    Todas as configurações da aplicação.
    Os valores são lidos das variáveis de ambiente e do arquivo .env.
    """

    # --- Pydantic Settings ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),
        env_file_encoding='utf-8',
        extra='ignore',
        case_sensitive=True
    )

    # --- Aplicação ---
    APP_NAME: str = "Vetly API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Vetly - Sistema de Gestão Veterinária"
    APP_ENV: str = Field("development", description="Ambiente (development, production, testing)")
    DEBUG_MODE: bool = Field(False, description="Ativa o eco de SQL e logs detalhados")
    LOG_LEVEL: str = Field("INFO", description="Nível do logger raiz")
    PORT: int = Field(3000, description="Porta HTTP usada pelo uvicorn")

    # --- Banco de dados ---
    DATABASE_URL: SecretStr = Field(..., description="URL de conexão do SQLAlchemy (ex.: postgresql+asyncpg://...)")
    DB_CREATE_TABLES: bool = Field(True, description="Cria as tabelas na inicialização (create_all)")

    # --- JWT ---
    SECRET_KEY: SecretStr = Field(..., description="Chave de assinatura dos tokens JWT")
    ALGORITHM: str = Field("HS256", description="Algoritmo de assinatura do JWT")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(60 * 24, description="Validade do token em minutos (24h)")

    # --- HTTP ---
    FRONTEND_URL: str = Field("*", description="Origem permitida pelo CORS")
    RATE_LIMIT_ENABLED: bool = Field(True, description="Liga o limitador de requisições")
    RATE_LIMIT: str = Field("100/15minutes", description="Limite por cliente (sintaxe do slowapi)")

    # --- Upload de imagens (Cloudinary) ---
    CLOUDINARY_CLOUD_NAME: str = Field("", description="Nome da conta no Cloudinary")
    CLOUDINARY_API_KEY: SecretStr = Field(SecretStr(""), description="Chave de API do Cloudinary")
    CLOUDINARY_API_SECRET: SecretStr = Field(SecretStr(""), description="Segredo de API do Cloudinary")
    MAX_IMAGE_SIZE_BYTES: int = Field(5 * 1024 * 1024, description="Tamanho máximo da imagem (5MB)")
    UPLOAD_TIMEOUT_SECONDS: float = Field(30.0, description="Tempo máximo de envio ao Cloudinary")
    USER_IMAGE_FOLDER: str = Field("users", description="Pasta lógica das fotos de usuário")

    # --- Relatórios ---
    REPORT_TIMEZONE: str = Field("America/Sao_Paulo", description="Fuso usado nas datas do prontuário")

    def model_post_init(self, __context: Any) -> None:  # noqa: ANN001
        # Em produção o CORS aberto não combina com credenciais.
        if self.APP_ENV == "production" and self.FRONTEND_URL == "*":
            self.FRONTEND_URL = ""

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.FRONTEND_URL.split(",") if origin.strip()]


settings = Settings()
