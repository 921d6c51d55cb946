"""
Demo data generator.

Creates numbered GitHub users (github_user_N) and dashboards
("Dashboard N"), spread over the existing clients and dashboard types.
Re-running skips rows that already exist.
"""

import logging
from dataclasses import dataclass
from itertools import cycle
from typing import List

from sqlalchemy.orm import Session

from github_dashboard.models.client import Client
from github_dashboard.models.dashboard import Dashboard
from github_dashboard.models.dashboard_github_user import DashboardGithubUser
from github_dashboard.models.dashboard_type import DashboardType
from github_dashboard.models.github_user import GithubUser
from github_dashboard.models.tier_type import TierType
from github_dashboard.services.slug import generate_slug

logger = logging.getLogger(__name__)

DEFAULT_USER_COUNT = 20
DEFAULT_DASHBOARD_COUNT = 10
USERS_PER_DASHBOARD = 3
DEMO_GITHUB_ID_OFFSET = 900000000
DEMO_CLIENT_NAME = "Demo Client"


class DemoDataError(Exception):
    """Prerequisite reference data is missing."""


@dataclass
class DemoDataResult:
    users_created: int = 0
    dashboards_created: int = 0
    links_created: int = 0


def generate_demo_data(
    db: Session,
    user_count: int = DEFAULT_USER_COUNT,
    dashboard_count: int = DEFAULT_DASHBOARD_COUNT,
) -> DemoDataResult:
    """
    Populate the database with demo users and dashboards.

    Requires the catalog to be seeded. A demo client on the first tier is
    created when no client exists.

    Raises:
        DemoDataError: If no tier types or dashboard types are present
    """
    dashboard_types = db.query(DashboardType).order_by(DashboardType.code.asc()).all()
    if not dashboard_types:
        raise DemoDataError("No dashboard types found - seed the catalog first")

    result = DemoDataResult()
    clients = _ensure_clients(db)
    users = _ensure_users(db, user_count, result)

    client_cycle = cycle(clients)
    type_cycle = cycle(dashboard_types)
    for n in range(1, dashboard_count + 1):
        name = f"Dashboard {n}"
        client = next(client_cycle)
        dashboard_type = next(type_cycle)

        slug = generate_slug(name)
        dashboard = db.query(Dashboard).filter(Dashboard.slug == slug).first()
        if dashboard is None:
            dashboard = Dashboard(
                name=name,
                slug=slug,
                description=f"Demo dashboard {n}",
                is_public=True,
                client_id=client.id,
                dashboard_type_id=dashboard_type.id,
            )
            db.add(dashboard)
            db.flush()
            result.dashboards_created += 1

        for user in _members_for(users, n):
            linked = db.query(DashboardGithubUser).filter(
                DashboardGithubUser.dashboard_id == dashboard.id,
                DashboardGithubUser.github_user_id == user.id,
            ).first()
            if linked is None:
                db.add(DashboardGithubUser(dashboard_id=dashboard.id, github_user_id=user.id))
                result.links_created += 1
        db.flush()

    db.commit()
    logger.info(
        "Demo data generated",
        extra={
            "users_created": result.users_created,
            "dashboards_created": result.dashboards_created,
            "links_created": result.links_created,
        },
    )
    return result


def _ensure_clients(db: Session) -> List[Client]:
    clients = db.query(Client).order_by(Client.name.asc()).all()
    if clients:
        return clients

    tier = db.query(TierType).order_by(TierType.code.asc()).first()
    if tier is None:
        raise DemoDataError("No tier types found - seed the catalog first")

    client = Client(name=DEMO_CLIENT_NAME, tier_type_id=tier.id)
    db.add(client)
    db.flush()
    return [client]


def _ensure_users(db: Session, user_count: int, result: DemoDataResult) -> List[GithubUser]:
    users = []
    for n in range(1, user_count + 1):
        github_user_id = str(DEMO_GITHUB_ID_OFFSET + n)
        user = db.query(GithubUser).filter(GithubUser.github_user_id == github_user_id).first()
        if user is None:
            login = f"github_user_{n}"
            user = GithubUser(
                github_user_id=github_user_id,
                github_username=login,
                display_name=f"Demo User {n}",
                avatar_url=f"https://avatars.githubusercontent.com/u/{DEMO_GITHUB_ID_OFFSET + n}",
                profile_url=f"https://github.com/{login}",
            )
            db.add(user)
            result.users_created += 1
        users.append(user)
    db.flush()
    return users


def _members_for(users: List[GithubUser], dashboard_number: int) -> List[GithubUser]:
    if not users:
        return []
    start = ((dashboard_number - 1) * USERS_PER_DASHBOARD) % len(users)
    count = min(USERS_PER_DASHBOARD, len(users))
    return [users[(start + i) % len(users)] for i in range(count)]
