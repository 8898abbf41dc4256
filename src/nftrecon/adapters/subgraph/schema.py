"""Pydantic models describing subgraph GraphQL payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

TOKENS_FIELD = "fakeGotchiNFTTokens"

TOKENS_QUERY = f"""
  query GetFakeGotchis($first: Int!, $skip: Int!, $orderBy: String, $orderDirection: String) {{
    {TOKENS_FIELD}(
      first: $first, skip: $skip, orderBy: $orderBy, orderDirection: $orderDirection
    ) {{
      id
      identifier
      name
      artistName
      editions
    }}
  }}
"""


class SubgraphBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TokenPayload(SubgraphBaseModel):
    """One token entity; also the on-disk token snapshot format."""

    id: str | None = None
    identifier: str
    name: str
    artist_name: str = Field(alias="artistName")
    editions: int

    @field_validator("id", "identifier", mode="before")
    @classmethod
    def _stringify_id(cls, value: object) -> object:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("editions", mode="before")
    @classmethod
    def _parse_editions(cls, value: int | str) -> int:
        return int(value)


class TokensData(SubgraphBaseModel):
    tokens: list[TokenPayload] = Field(alias=TOKENS_FIELD)


class GraphQLError(SubgraphBaseModel):
    message: str


class TokensResponse(SubgraphBaseModel):
    data: TokensData | None = None
    errors: list[GraphQLError] | None = None
