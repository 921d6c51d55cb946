# API routes
from github_dashboard.api.routes import health
from github_dashboard.api.routes import dashboards
from github_dashboard.api.routes import clients
from github_dashboard.api.routes import catalog
from github_dashboard.api.routes import github
from github_dashboard.api.routes import layouts

__all__ = ["health", "dashboards", "clients", "catalog", "github", "layouts"]
