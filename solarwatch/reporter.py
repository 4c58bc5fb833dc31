"""Text and HTML reports for maintenance alerts and environmental impact."""

import json
import sys
from pathlib import Path

from bs4 import BeautifulSoup

from .utils import format_local_time

HTML_OUTPUT_PATH = "environmental_impact.html"
CHART_JS_URL = "https://cdn.jsdelivr.net/npm/chart.js"

DASHBOARD_STYLE = """
.dashboard { display: flex; flex-wrap: wrap; gap: 20px; }
.chart-container { width: 45%; min-width: 300px; }
"""

CHART_LOADER = """
for (const chartId of ['energyChart', 'co2Chart']) {
    const config = JSON.parse(document.getElementById(chartId + 'Data').textContent);
    new Chart(document.getElementById(chartId), config);
}
"""


def energy_chart(impact):
    """Pie chart definition of solar energy produced vs grid energy displaced."""
    return {
        "type": "pie",
        "data": {
            "labels": ["Solar Energy Produced", "Grid Energy Displaced"],
            "datasets": [{
                "data": [impact.total_energy_kwh, impact.grid_energy_displaced()],
                "backgroundColor": ["#FFA500", "#DDDDDD"],
            }],
        },
        "options": {
            "responsive": True,
            "plugins": {"title": {"display": True, "text": "Energy Production (kWh)"}},
        },
    }


def co2_chart(impact):
    """Bar chart definition of CO2 emissions avoided."""
    return {
        "type": "bar",
        "data": {
            "labels": ["CO2 Emissions Avoided"],
            "datasets": [{
                "data": [impact.co2_avoided()],
                "backgroundColor": ["#4BC0C0"],
            }],
        },
        "options": {
            "responsive": True,
            "plugins": {"title": {"display": True, "text": "CO2 Savings (kg)"}},
        },
    }


class Reporter:
    """Renders maintenance alerts and impact figures.

    Text reports are printed to an output stream (stdout by default). The
    visualization is a standalone HTML page with two Chart.js charts.
    """

    def __init__(self, out=None, debug=False):
        """Initialize the reporter.

        Args:
            out: Text stream for reports, defaults to sys.stdout
            debug: Enable debug logging
        """
        self.out = out if out is not None else sys.stdout
        self.debug_enabled = debug

    def debug(self, msg):
        """Log debug message if debug mode is enabled."""
        if self.debug_enabled:
            print(msg)

    @staticmethod
    def format_alert(alert):
        return (
            f"[ALERT] {alert.message}"
            f" | Severity: {alert.severity * 100:.0f}%"
            f" | Time: {format_local_time(alert.timestamp)}"
        )

    def print_maintenance_alerts(self, alerts):
        """Print alerts in the order they were raised.

        Args:
            alerts: List of MaintenanceAlert
        """
        if not alerts:
            print("No active maintenance alerts", file=self.out)
            return

        print("\n=== MAINTENANCE ALERTS ===", file=self.out)
        for alert in alerts:
            print(self.format_alert(alert), file=self.out)

    def print_impact_summary(self, impact):
        print("\n=== ENVIRONMENTAL IMPACT REPORT ===", file=self.out)
        print(f"Total solar energy produced: {impact.total_energy_kwh:g} kWh", file=self.out)
        print(f"CO2 emissions avoided: {impact.co2_avoided():g} kg", file=self.out)
        print(f"Equivalent to planting {impact.tree_equivalents():g} trees", file=self.out)

    def build_visualization(self, impact):
        """Build the HTML visualization document.

        Each chart definition is embedded as JSON in its own script element
        and rendered by a small loader script.

        Args:
            impact: ImpactAccumulator with the totals to chart

        Returns:
            BeautifulSoup: The document
        """
        soup = BeautifulSoup("<!DOCTYPE html><html><head></head><body></body></html>", "html.parser")

        meta = soup.new_tag("meta", attrs={"charset": "utf-8"})
        title = soup.new_tag("title")
        title.string = "Solar Energy Environmental Impact"
        chart_js = soup.new_tag("script", attrs={"src": CHART_JS_URL})
        style = soup.new_tag("style")
        style.string = DASHBOARD_STYLE
        for tag in (meta, title, chart_js, style):
            soup.head.append(tag)

        heading = soup.new_tag("h1")
        heading.string = "Solar Energy Environmental Impact"
        soup.body.append(heading)

        dashboard = soup.new_tag("div", attrs={"class": "dashboard"})
        for chart_id, definition in (("energyChart", energy_chart(impact)), ("co2Chart", co2_chart(impact))):
            container = soup.new_tag("div", attrs={"class": "chart-container"})
            container.append(soup.new_tag("canvas", attrs={"id": chart_id}))
            dashboard.append(container)

            data = soup.new_tag("script", attrs={"type": "application/json", "id": f"{chart_id}Data"})
            data.string = json.dumps(definition)
            soup.body.append(data)
        soup.body.insert(1, dashboard)

        loader = soup.new_tag("script")
        loader.string = CHART_LOADER
        soup.body.append(loader)
        return soup

    def write_visualization(self, impact, path=HTML_OUTPUT_PATH):
        """Write the HTML visualization to a file.

        Errors writing the file are not handled here.

        Args:
            impact: ImpactAccumulator with the totals to chart
            path: Output file path

        Returns:
            Path: The file written
        """
        path = Path(path)
        path.write_text(str(self.build_visualization(impact)), encoding="utf-8")
        self.debug(f"write_visualization: wrote {path.resolve()}")
        return path

    def generate_environmental_report(self, impact, path=HTML_OUTPUT_PATH):
        """Print the impact summary and write the visualization."""
        self.print_impact_summary(impact)
        path = self.write_visualization(impact, path)
        print(f"\nGenerated visualization: {path}", file=self.out)
        return path
