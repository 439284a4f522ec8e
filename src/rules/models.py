from pydantic import BaseModel, Field, field_validator


class ServerRules(BaseModel):
    title: str = "JSON Collections API"
    host: str = "127.0.0.1"
    port: int = Field(default=3000, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    read_only: bool = False


class StoreRules(BaseModel):
    path: str = "db.json"
    persist: bool = True
    foreign_key_suffix: str = "Id"

    @field_validator("foreign_key_suffix")
    @classmethod
    def suffix_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("foreign_key_suffix must not be empty")
        return v


class QueryRules(BaseModel):
    default_page_limit: int = Field(default=10, ge=1)


class Rules(BaseModel):
    server: ServerRules = Field(default_factory=ServerRules)
    store: StoreRules = Field(default_factory=StoreRules)
    query: QueryRules = Field(default_factory=QueryRules)

    # QueryRulesPort
    def get_default_page_limit(self) -> int:
        return self.query.default_page_limit

    def get_foreign_key_suffix(self) -> str:
        return self.store.foreign_key_suffix
