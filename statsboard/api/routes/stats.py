from datetime import UTC
from datetime import datetime

from fastapi import APIRouter
from fastapi import Depends
from fastapi import HTTPException
from fastapi import Query
from fastapi import Response
from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from statsboard.api.schemas.preferences import ExportFormat
from statsboard.api.schemas.stats import DashboardResponse
from statsboard.core.security import bearer_scheme
from statsboard.core.security import extract_bearer_token
from statsboard.db import get_db
from statsboard.records import StatsRecord
from statsboard.services.export_service import MEDIA_TYPES
from statsboard.services.export_service import export_filename
from statsboard.services.export_service import render_export_csv
from statsboard.services.export_service import render_export_json
from statsboard.services.preferences_service import apply_layout
from statsboard.services.preferences_service import get_layout
from statsboard.services.preferences_service import get_preferences
from statsboard.services.stats_service import GitHubAPIError
from statsboard.services.stats_service import GitHubQueryError
from statsboard.services.stats_service import GitHubUserNotFoundError
from statsboard.services.stats_service import InvalidGitHubTokenError
from statsboard.services.stats_service import get_user_stats
from statsboard.settings import Settings


router = APIRouter()
settings = Settings()


@router.get("/")
async def root() -> dict[str, str]:
    """Return a basic service greeting."""

    return {"message": "GitHub stats dashboard"}


@router.get("/health/live")
def health_live() -> dict[str, str]:
    """Return liveness probe response for health checks."""

    return {"status": "ok"}


def load_stats(username: str, token: str, include_private_repos: bool) -> StatsRecord:
    """Run the stats pipeline and translate GitHub failures into HTTP errors."""

    try:
        return get_user_stats(
            username=username,
            token=token,
            graphql_url=settings.github_graphql_url,
            include_private_repos=include_private_repos,
            timeout=settings.http_timeout_seconds,
        )
    except InvalidGitHubTokenError as exc:
        raise HTTPException(status_code=401, detail="GitHub token is invalid") from exc
    except GitHubUserNotFoundError as exc:
        raise HTTPException(status_code=404, detail="User not found") from exc
    except GitHubQueryError as exc:
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except GitHubAPIError as exc:
        raise HTTPException(
            status_code=502, detail="GitHub API request failed"
        ) from exc


@router.get("/stats/{username}", response_model=StatsRecord)
def get_stats(
    username: str,
    include_private: bool | None = Query(default=None),
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    db: Session = Depends(get_db),
) -> StatsRecord:
    """Return derived statistics for a GitHub user."""

    token = extract_bearer_token(credentials)
    if include_private is None:
        include_private = get_preferences(db, username).show_private_repos
    return load_stats(username, token, include_private)


@router.get("/stats/{username}/export")
def export_stats(
    username: str,
    export_format: ExportFormat | None = Query(default=None, alias="format"),
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    db: Session = Depends(get_db),
) -> Response:
    """Download the user's statistics as a JSON document or a CSV table."""

    token = extract_bearer_token(credentials)
    preferences = get_preferences(db, username)
    export_format = export_format or preferences.export_format

    record = load_stats(username, token, preferences.show_private_repos)
    exported_at = datetime.now(UTC)
    if export_format == "json":
        content = render_export_json(record, exported_at)
    else:
        content = render_export_csv(record, preferences.date_format)

    filename = export_filename(record.login, export_format, exported_at.date())
    return Response(
        content=content,
        media_type=MEDIA_TYPES[export_format],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/dashboard/{username}", response_model=DashboardResponse)
def get_dashboard(
    username: str,
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
    db: Session = Depends(get_db),
) -> DashboardResponse:
    """Derive statistics, then resolve the viewer's saved section layout."""

    token = extract_bearer_token(credentials)
    preferences = get_preferences(db, username)
    record = load_stats(username, token, preferences.show_private_repos)
    sections = apply_layout(get_layout(db, record.login))
    return DashboardResponse(stats=record, preferences=preferences, sections=sections)
