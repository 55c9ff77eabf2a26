from pathlib import Path
from typing import Optional
from jinja2 import Template
from datetime import datetime

from config import BOUNDED_STATS, stat_label
from crisis import build_map_crises
from nation import Nation
from politics import FACTION_NAMES, INSTITUTION_NAMES


class ReportGenerator:
    """Generates an HTML chronicle of a nation."""

    def __init__(self, config):
        self.config = config
        self.template = self._get_template()

    def generate_report(self, nation: Nation, output_dir: Path, map_image: Optional[str] = None) -> Path:
        """Render the chronicle next to the map image and return its path."""
        stats = [
            {"label": stat_label(k, nation.era), "value": nation.stats[k]}
            for k in BOUNDED_STATS
        ]
        institutions = [(INSTITUTION_NAMES[k], v) for k, v in nation.institutions.items()]
        factions = [(FACTION_NAMES[k], v) for k, v in nation.factions.items()]

        html_content = self.template.render(
            nation=nation,
            timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            stats=stats,
            population=nation.stats["population"],
            gdp=nation.stats["gdp"],
            institutions=institutions,
            factions=factions,
            crises=build_map_crises(nation.crisis_arcs, self.config.map_crises_cap),
            decisions=list(reversed(nation.decision_history[-25:])),
            history_log=list(reversed(nation.history_log)),
            map_image=map_image,
        )

        report_path = Path(output_dir) / f"{nation.id}.html"
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(html_content)

        return report_path

    def _get_template(self) -> Template:
        """Return Jinja2 template for the chronicle."""
        return Template("""
<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{{ nation.name }} - Chronicle</title>
    <link href="https://cdn.jsdelivr.net/npm/bootstrap@5.3.0/dist/css/bootstrap.min.css" rel="stylesheet">
    <style>
        body { background-color: #f8f9fa; }
        .card { margin-bottom: 20px; box-shadow: 0 4px 6px rgba(0,0,0,0.1); }
        .event-log { max-height: 500px; overflow-y: auto; font-family: monospace; font-size: 0.9em; }
        .stat-value { font-weight: bold; color: #0d6efd; }
        .flag { display: inline-block; width: 28px; height: 18px; border: 1px solid #333; vertical-align: middle; }
        img { max-width: 100%; height: auto; border-radius: 5px; }
    </style>
</head>
<body>
    <nav class="navbar navbar-dark bg-dark">
        <div class="container-fluid">
            <span class="navbar-brand mb-0 h1">
                <span class="flag" style="background: linear-gradient(90deg, {{ nation.flag.primary }} 50%, {{ nation.flag.secondary }} 50%);"></span>
                {{ nation.name }}
            </span>
            <span class="navbar-text">{{ timestamp }}</span>
        </div>
    </nav>

    <div class="container mt-4">
        <div class="row mb-4">
            <div class="col-md-8">
                <h4>{{ nation.government_type }} &middot; {{ nation.era }}</h4>
                {% if nation.motto %}<p class="fst-italic">"{{ nation.motto }}"</p>{% endif %}
                <p>Leader: {{ nation.leader or "Unknown" }} &middot; Capital: {{ nation.capital or "Unknown" }}
                   &middot; Founded {{ nation.founded.strftime("%Y-%m-%d") }} &middot; {{ nation.issues_resolved }} decisions</p>
                <p>Population {{ "{:,}".format(population|int) }} &middot; GDP per capita {{ "{:,}".format(gdp|int) }} {{ nation.currency }}</p>
            </div>
        </div>

        <div class="row">
            <div class="col-md-4">
                <div class="card">
                    <div class="card-header">Indicators</div>
                    <ul class="list-group list-group-flush">
                    {% for stat in stats %}
                        <li class="list-group-item d-flex justify-content-between">{{ stat.label }} <span class="stat-value">{{ stat.value }}</span></li>
                    {% endfor %}
                    </ul>
                </div>
            </div>
            <div class="col-md-4">
                <div class="card">
                    <div class="card-header">Institutions</div>
                    <ul class="list-group list-group-flush">
                    {% for name, value in institutions %}
                        <li class="list-group-item d-flex justify-content-between">{{ name }} <span class="stat-value">{{ value }}</span></li>
                    {% endfor %}
                    </ul>
                </div>
            </div>
            <div class="col-md-4">
                <div class="card">
                    <div class="card-header">Factions</div>
                    <ul class="list-group list-group-flush">
                    {% for name, value in factions %}
                        <li class="list-group-item d-flex justify-content-between">{{ name }} <span class="stat-value">{{ value }}</span></li>
                    {% endfor %}
                    </ul>
                </div>
            </div>
        </div>

        <div class="row">
            <div class="col-md-7">
                <div class="card">
                    <div class="card-header">Regions</div>
                    <div class="card-body">
                        {% if map_image %}<img src="{{ map_image }}" alt="Region map">{% endif %}
                        <table class="table table-sm mt-3">
                            <thead><tr><th>Region</th><th>Terrain</th><th>Specialization</th><th>Development</th><th>Stability</th></tr></thead>
                            <tbody>
                            {% for region in nation.regions %}
                                <tr><td>{{ region.name }}</td><td>{{ region.terrain.value }}</td><td>{{ region.specialization.value }}</td>
                                    <td>{{ region.development }}</td><td>{{ region.stability }}</td></tr>
                            {% endfor %}
                            </tbody>
                        </table>
                    </div>
                </div>
            </div>
            <div class="col-md-5">
                <div class="card">
                    <div class="card-header">Active Crises</div>
                    <ul class="list-group list-group-flush">
                    {% for arc in crises %}
                        <li class="list-group-item">
                            <strong>{{ arc.label }}</strong> in {{ arc.region_name }}
                            <span class="badge bg-{{ 'danger' if arc.severity == 'high' else ('warning' if arc.severity == 'medium' else 'secondary') }}">{{ arc.severity }}</span>
                            <div class="small text-muted">{{ arc.reason }} (stage {{ arc.stage }}/{{ arc.max_stage }})</div>
                        </li>
                    {% else %}
                        <li class="list-group-item">No active crises.</li>
                    {% endfor %}
                    </ul>
                </div>
            </div>
        </div>

        <div class="row">
            <div class="col-md-6">
                <div class="card">
                    <div class="card-header">Recent Decisions</div>
                    <div class="card-body event-log">
                    {% for d in decisions %}
                        <div><strong>Turn {{ d.turn }}</strong> {{ d.issueTitle }}: {{ d.optionText }}</div>
                    {% else %}
                        <div>No decisions yet.</div>
                    {% endfor %}
                    </div>
                </div>
            </div>
            <div class="col-md-6">
                <div class="card">
                    <div class="card-header">Chronicle</div>
                    <div class="card-body event-log">
                    {% for line in history_log %}
                        <div>{{ line }}</div>
                    {% endfor %}
                    </div>
                </div>
            </div>
        </div>
    </div>
</body>
</html>
""")
