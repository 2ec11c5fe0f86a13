"""PDF generation for insight reports.

This module creates a printable PDF showing:
- Headline financial, reliability and utilization figures
- Shift starts by weekday and by hour
- The monthly history table
"""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from shiftinsights.domain.stats import WEEKDAY_NAMES, InsightsBundle

# Color definitions (RGB tuples, 0-1 scale)
COLORS = {
    "weekday": (0.4, 0.4, 0.8),  # Blue
    "hour": (0.4, 0.7, 0.4),  # Green
    "window": (0.8, 0.6, 0.2),  # Orange
    "rule": (0.7, 0.7, 0.7),  # Light gray
}


class InsightsPDFGenerator:
    """Generates printable PDF insight reports.

    Example:
        >>> generator = InsightsPDFGenerator()
        >>> generator.generate(bundle, "insights.pdf")
    """

    def __init__(
        self,
        page_width: float = 792,  # Letter landscape width (11")
        page_height: float = 612,  # Letter landscape height (8.5")
        margin: float = 36,  # 0.5 inch margins
    ):
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin

    def generate(
        self,
        bundle: InsightsBundle,
        output_path: Union[str, Path],
    ) -> None:
        """Generate the PDF report and save it to a file.

        Args:
            bundle: The insights to render.
            output_path: Path to save the PDF.
        """
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.pdfgen import canvas

        c = canvas.Canvas(str(output_path), pagesize=landscape(letter))
        self._draw_summary_page(c, bundle)
        self._draw_distribution_page(c, bundle)
        c.save()

    def generate_to_buffer(self, bundle: InsightsBundle) -> BytesIO:
        """Generate the PDF report and return it as a bytes buffer."""
        from reportlab.lib.pagesizes import landscape, letter
        from reportlab.pdfgen import canvas

        buffer = BytesIO()
        c = canvas.Canvas(buffer, pagesize=landscape(letter))
        self._draw_summary_page(c, bundle)
        self._draw_distribution_page(c, bundle)
        c.save()
        buffer.seek(0)
        return buffer

    def _draw_header(self, c, bundle: InsightsBundle, title: str) -> None:
        c.setFont("Helvetica-Bold", 16)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 20,
            f"{title} - {bundle.location_id or 'All Locations'}",
        )

        c.setFont("Helvetica", 10)
        c.drawString(
            self.margin,
            self.page_height - self.margin - 35,
            f"As of {bundle.generated_at:%Y-%m-%d %H:%M}",
        )

    def _draw_section(self, c, x: float, y: float, title: str, rows: list[str]) -> float:
        """Draw a titled list of figures and return the y below it."""
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(x, y, title)
        y -= 18

        c.setFont("Helvetica", 10)
        for row in rows:
            c.drawString(x + 10, y, row)
            y -= 14
        return y - 10

    def _draw_summary_page(self, c, bundle: InsightsBundle) -> None:
        """Draw the headline figures and the history table."""
        self._draw_header(c, bundle, "Location Insights")

        financial = bundle.financial
        reliability = bundle.reliability
        utilization = bundle.utilization
        overview = bundle.overview

        left = self.margin
        right = self.margin + (self.page_width - 2 * self.margin) / 2
        top = self.page_height - self.margin - 70

        y_left = self._draw_section(c, left, top, "Financial", [
            f"Revenue: ${financial.total_revenue:,.2f}",
            f"Labor cost: ${financial.labor_cost:,.2f}",
            f"Profit margin: {financial.profit_margin_percent:.1f}%",
            f"Revenue growth: {financial.revenue_growth_percent:+.1f}%",
            f"Average shift cost: ${financial.average_shift_cost:,.2f}",
            f"Cost per day: ${financial.cost_per_day:,.2f}",
            f"Average hourly wage: ${financial.average_hourly_wage:,.2f}",
            f"Projected monthly earnings: ${financial.projected_monthly_earnings:,.2f}",
        ])
        self._draw_section(c, left, y_left, "Overview", [
            f"Total shifts: {overview.total_shifts}",
            f"Completed shifts: {overview.completed_shifts}",
            f"Total hours: {overview.total_hours:.1f}",
            f"Total shift cost: ${overview.total_shift_cost:,.2f}",
            f"Shifts per day: {overview.average_shifts_per_day:.2f}",
        ])

        y_right = self._draw_section(c, right, top, "Reliability", [
            f"Completion rate: {reliability.completion_rate_percent:.1f}%",
            f"No-show rate: {reliability.no_show_rate_percent:.1f}%",
            f"Completed / past: {reliability.completed_count} / {reliability.past_count}",
            f"Canceled: {reliability.canceled_count}",
        ])
        y_right = self._draw_section(c, right, y_right, "Utilization", [
            f"Utilization: {utilization.utilization_percent:.1f}% "
            f"({utilization.employees_with_at_least_one_shift}"
            f"/{utilization.assigned_employee_count})",
            f"Average tenure: {utilization.average_tenure_months:.1f} months",
            f"Average reliability: {utilization.average_reliability_percent:.1f}%",
            f"Top performers: {utilization.top_performer_count}",
        ])
        self._draw_history_table(c, bundle, right, y_right)

        c.showPage()

    def _draw_history_table(self, c, bundle: InsightsBundle, x: float, y: float) -> None:
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(x, y, "Monthly History")
        y -= 18

        columns = [x + 10, x + 90, x + 170, x + 270]
        c.setFont("Helvetica-Bold", 9)
        for col_x, label in zip(columns, ["Month", "Hours", "Earnings", "Employees"]):
            c.drawString(col_x, y, label)
        c.setStrokeColorRGB(*COLORS["rule"])
        c.line(x + 10, y - 3, x + 330, y - 3)
        y -= 14

        c.setFont("Helvetica", 9)
        for point in bundle.history:
            c.drawString(columns[0], y, point.period_label)
            c.drawString(columns[1], y, f"{point.total_hours:.1f}")
            c.drawString(columns[2], y, f"${point.total_earnings:,.2f}")
            c.drawString(columns[3], y, str(point.distinct_employee_count))
            y -= 12

    def _draw_distribution_page(self, c, bundle: InsightsBundle) -> None:
        """Draw weekday and hourly bar charts."""
        self._draw_header(c, bundle, "Shift Distribution")
        distribution = bundle.distribution

        chart_width = self.page_width - 2 * self.margin - 40
        y = self.page_height - self.margin - 80

        c.setFont("Helvetica-Bold", 12)
        c.drawString(self.margin, y, "Shift Starts by Weekday")
        self._draw_bar_chart(
            c,
            list(distribution.counts_by_weekday),
            list(WEEKDAY_NAMES),
            self.margin + 30,
            y - 170,
            chart_width / 2,
            150,
            COLORS["weekday"],
        )

        window = distribution.busiest_window
        in_window = {(window.start_hour + i) % 24 for i in range(self.window_span(window))}
        y -= 220
        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica-Bold", 12)
        c.drawString(
            self.margin,
            y,
            f"Shift Starts by Hour (busiest window {window.start_hour:02d}:00-"
            f"{window.end_hour:02d}:00, {window.count} starts)",
        )
        self._draw_bar_chart(
            c,
            list(distribution.hour_counts),
            [f"{h:02d}" for h in range(24)],
            self.margin + 30,
            y - 170,
            chart_width,
            150,
            COLORS["hour"],
            highlight=in_window if window.count else set(),
        )

        c.showPage()

    @staticmethod
    def window_span(window) -> int:
        span = (window.end_hour - window.start_hour) % 24
        return span or 24

    def _draw_bar_chart(
        self,
        c,
        values: list[int],
        labels: list[str],
        x: float,
        y: float,
        width: float,
        height: float,
        color: tuple[float, float, float],
        highlight: Optional[set[int]] = None,
    ) -> None:
        """Draw a simple bar chart."""
        if not values:
            return
        highlight = highlight or set()

        max_value = max(values) or 1
        bar_width = width / len(values)

        c.setStrokeColorRGB(0, 0, 0)
        c.setLineWidth(1)
        c.line(x, y, x, y + height)  # Y axis
        c.line(x, y, x + width, y)  # X axis

        for i, value in enumerate(values):
            bar_height = (value / max_value) * height
            c.setFillColorRGB(*(COLORS["window"] if i in highlight else color))
            c.rect(x + i * bar_width, y, bar_width - 2, bar_height, fill=1, stroke=0)

        c.setFillColorRGB(0, 0, 0)
        c.setFont("Helvetica", 7)
        c.drawRightString(x - 5, y, "0")
        c.drawRightString(x - 5, y + height - 5, str(max_value))
        for i, label in enumerate(labels):
            c.drawCentredString(x + i * bar_width + bar_width / 2, y - 12, label)
