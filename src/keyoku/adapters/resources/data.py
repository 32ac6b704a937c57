"""Recurso: exportación de datos (GDPR).

Flujo: `export()` devuelve un job; cuando termina, `download()` trae el
archivo. La descarga es un request autenticado normal del dispatcher (mismos
headers, timeout y clasificación de errores), solo que sin decodificar JSON.
"""

from __future__ import annotations

import re
from pathlib import Path

from keyoku.adapters.dispatcher import Dispatcher
from keyoku.core.domain.models import ExportDownload, ExportResponse

_FILENAME_RE = re.compile(r"""filename\*?=(?:UTF-8'')?["']?([^"';]+)["']?""", re.IGNORECASE)


def _filename_from_disposition(value: str | None) -> str | None:
    if not value:
        return None
    match = _FILENAME_RE.search(value)
    if not match:
        return None
    name = Path(match.group(1).strip()).name
    return name or None


class DataResource:
    def __init__(self, dispatcher: Dispatcher) -> None:
        self._dispatcher = dispatcher

    async def export(self) -> ExportResponse:
        """Inicia un export; el `job_id` se puede esperar con `client.job(...)`."""

        data = await self._dispatcher.request("GET", "/v1/data/export")
        return ExportResponse.from_wire(data)

    async def download(self, job_id: str) -> ExportDownload:
        response = await self._dispatcher.request_raw(
            "GET",
            f"/v1/data/export/{job_id}/download",
        )
        return ExportDownload(
            job_id=job_id,
            content=response.content,
            content_type=response.header("Content-Type"),
            filename=_filename_from_disposition(response.header("Content-Disposition")),
        )

    async def download_to(self, job_id: str, output_path: Path) -> Path:
        """Descarga el export y lo escribe en `output_path`.

        Si `output_path` es un directorio existente se usa el nombre que
        sugiere el servidor (o `keyoku-export-<job_id>`).
        """

        download = await self.download(job_id)
        if output_path.is_dir():
            output_path = output_path / (download.filename or f"keyoku-export-{job_id}")
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(download.content)
        return output_path
