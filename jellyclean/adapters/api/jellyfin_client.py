"""
Client Jellyfin pour la lecture du catalogue de la mediatheque.

Implemente l'interface ICatalogClient. Jellyfin est la source de verite
pour ce qui existe dans la bibliotheque et pour la date d'ajout de chaque
element.

Usage:
    client = JellyfinClient(base_url="http://jellyfin:8096", api_key="xxx")
    entries = await client.list_entries([ItemKind.MOVIE, ItemKind.SEASON])
    series = await client.get_entries_by_ids(["abc", "def"])
    await client.close()
"""

import re
from datetime import datetime, timezone
from typing import Any, Iterable, Optional

import httpx
from loguru import logger

from jellyclean.adapters.api.retry import request_with_retry
from jellyclean.core.entities.catalog import CatalogEntry, ItemKind
from jellyclean.core.ports.api_clients import ICatalogClient

# Jellyfin renvoie des fractions de seconde sur 7 chiffres (ticks .NET)
_FRACTION_PATTERN = re.compile(r"(\.\d{6})\d+")

_ITEM_FIELDS = "ProviderIds,DateCreated"

# Limite le nombre d'IDs par requete pour garder des URLs raisonnables
_IDS_CHUNK_SIZE = 100


def parse_jellyfin_datetime(value: str) -> datetime:
    """
    Parse une date ISO 8601 Jellyfin en datetime UTC.

    Gere le suffixe "Z", les fractions de seconde sur plus de 6 chiffres
    et les dates sans fuseau (considerees comme UTC).

    Raises:
        ValueError: Si la chaine n'est pas une date ISO valide
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION_PATTERN.sub(r"\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def item_to_entry(item: dict[str, Any]) -> Optional[CatalogEntry]:
    """
    Convertit un element JSON Jellyfin en CatalogEntry.

    Returns:
        L'entree, ou None si l'element n'a pas d'ID ou de date d'ajout exploitable
    """
    item_id = item.get("Id")
    date_created = item.get("DateCreated")
    if not item_id or not date_created:
        return None
    try:
        created_at = parse_jellyfin_datetime(date_created)
    except ValueError:
        logger.warning(f"Date d'ajout invalide pour {item_id}: {date_created!r}")
        return None

    provider_ids = {
        str(key): str(value)
        for key, value in (item.get("ProviderIds") or {}).items()
        if value is not None
    }

    return CatalogEntry(
        id=str(item_id),
        kind=ItemKind(item.get("Type", "")),
        name=item.get("Name") or "",
        created_at=created_at,
        series_id=item.get("SeriesId"),
        series_name=item.get("SeriesName"),
        provider_ids=provider_ids,
        image_tag=(item.get("ImageTags") or {}).get("Primary"),
        series_image_tag=item.get("SeriesPrimaryImageTag"),
    )


class JellyfinClient(ICatalogClient):
    """
    Client API Jellyfin.

    Implemente ICatalogClient avec:
    - Liste des elements par type, tries par date d'ajout decroissante
    - Recuperation d'elements par liste d'IDs (par paquets)
    - Construction des URLs d'images
    - Retry automatique sur rate limiting (429/503)

    Si user_id est fourni, les requetes passent par la vue bibliotheque de
    l'utilisateur (/Users/{id}/Items), sinon par /Items.
    """

    IMAGE_MAX_HEIGHT = 400

    def __init__(
        self,
        base_url: str,
        api_key: str,
        user_id: Optional[str] = None,
        timeout: float = 30.0,
        max_retries: int = 5,
    ) -> None:
        """
        Initialise le client Jellyfin.

        Args:
            base_url: URL du serveur Jellyfin (sans slash final)
            api_key: Cle API Jellyfin
            user_id: ID utilisateur optionnel pour restreindre la vue
            timeout: Timeout de chaque requete en secondes
            max_retries: Nombre de tentatives sur 429/503
        """
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._user_id = user_id
        self._timeout = timeout
        self._max_retries = max_retries
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """Retourne le client HTTP, le cree si necessaire (lazy init)."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={
                    "Accept": "application/json",
                    "X-Emby-Token": self._api_key,
                },
                timeout=self._timeout,
            )
        return self._client

    @property
    def _items_path(self) -> str:
        if self._user_id:
            return f"/Users/{self._user_id}/Items"
        return "/Items"

    async def _query_items(self, params: dict[str, str]) -> list[CatalogEntry]:
        response = await request_with_retry(
            self._get_client(),
            "GET",
            self._items_path,
            max_attempts=self._max_retries,
            params=params,
        )
        data = response.json()
        entries = []
        for item in data.get("Items", []):
            entry = item_to_entry(item)
            if entry is None:
                logger.debug(f"Element Jellyfin ignore (ID ou date manquant): {item.get('Name')}")
                continue
            entries.append(entry)
        return entries

    async def list_entries(
        self,
        kinds: Iterable[ItemKind],
        limit: Optional[int] = None,
    ) -> list[CatalogEntry]:
        """
        Liste les elements des types demandes, les plus recents d'abord.

        Args:
            kinds: Types Jellyfin a inclure (Movie, Series, Season...)
            limit: Nombre maximum d'elements (None = tous)

        Returns:
            Liste de CatalogEntry
        """
        params = {
            "IncludeItemTypes": ",".join(kind.value for kind in kinds),
            "Recursive": "true",
            "Fields": _ITEM_FIELDS,
            "SortBy": "DateCreated",
            "SortOrder": "Descending",
        }
        if limit is not None:
            params["Limit"] = str(limit)

        entries = await self._query_items(params)
        logger.debug(f"Jellyfin: {len(entries)} elements ({params['IncludeItemTypes']})")
        return entries

    async def get_entries_by_ids(self, ids: Iterable[str]) -> list[CatalogEntry]:
        """
        Recupere les elements correspondant aux IDs donnes.

        Les IDs en double sont ignores. Les IDs inconnus de Jellyfin sont
        simplement absents du resultat.
        """
        unique_ids = list(dict.fromkeys(i for i in ids if i))
        if not unique_ids:
            return []

        entries: list[CatalogEntry] = []
        for start in range(0, len(unique_ids), _IDS_CHUNK_SIZE):
            chunk = unique_ids[start:start + _IDS_CHUNK_SIZE]
            entries.extend(
                await self._query_items({"Ids": ",".join(chunk), "Fields": _ITEM_FIELDS})
            )
        return entries

    def image_url(self, entry: CatalogEntry) -> str:
        """
        Retourne l'URL de l'image principale.

        Une saison sans image propre utilise l'image de sa serie parente.
        """
        item_id, tag = entry.id, entry.image_tag
        if tag is None and entry.kind == ItemKind.SEASON and entry.series_id:
            item_id, tag = entry.series_id, entry.series_image_tag

        url = f"{self._base_url}/Items/{item_id}/Images/Primary?maxHeight={self.IMAGE_MAX_HEIGHT}"
        if tag:
            url += f"&tag={tag}"
        return url

    async def close(self) -> None:
        """Ferme le client HTTP."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
