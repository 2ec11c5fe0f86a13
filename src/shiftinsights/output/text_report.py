"""Plain-text output for insight bundles.

This module renders an InsightsBundle as a human-readable report:
- Financial, reliability and utilization figures
- Weekday and hourly histograms
- The monthly history table
"""

from pathlib import Path
from typing import Union

from shiftinsights.domain.stats import WEEKDAY_NAMES, InsightsBundle


class InsightsTextReport:
    """Generates text reports for insight bundles.

    Example:
        >>> report = InsightsTextReport()
        >>> print(report.generate_to_string(bundle))
    """

    def __init__(self, bar_width: int = 40):
        self.bar_width = bar_width

    def generate(
        self,
        bundle: InsightsBundle,
        output_path: Union[str, Path],
    ) -> str:
        """Generate the report and save it to a file.

        Args:
            bundle: The insights to render.
            output_path: Path to save the text file.

        Returns:
            The generated text content.
        """
        content = self._generate_content(bundle)
        Path(output_path).write_text(content)
        return content

    def generate_to_string(self, bundle: InsightsBundle) -> str:
        return self._generate_content(bundle)

    def _generate_content(self, bundle: InsightsBundle) -> str:
        lines = []

        lines.append("=" * 72)
        scope = bundle.location_id or "all locations"
        lines.append(f"SHIFT INSIGHTS - {scope} - as of {bundle.generated_at.isoformat()}")
        lines.append("=" * 72)
        lines.append("")

        overview = bundle.overview
        lines.append("OVERVIEW")
        lines.append("-" * 72)
        lines.append(f"  Total shifts:          {overview.total_shifts}")
        lines.append(f"  Completed shifts:      {overview.completed_shifts}")
        lines.append(f"  Total hours:           {overview.total_hours:.1f}")
        lines.append(f"  Total earnings:        ${overview.total_earnings:,.2f}")
        lines.append(f"  Total shift cost:      ${overview.total_shift_cost:,.2f}")
        lines.append(f"  Cost per shift:        ${overview.average_shift_cost:,.2f}")
        lines.append(f"  Shifts per day:        {overview.average_shifts_per_day:.2f}")
        lines.append("")

        financial = bundle.financial
        lines.append("FINANCIAL")
        lines.append("-" * 72)
        lines.append(f"  Revenue:               ${financial.total_revenue:,.2f}")
        lines.append(f"  Labor cost:            ${financial.labor_cost:,.2f}")
        lines.append(f"  Profit margin:         {financial.profit_margin_percent:.1f}%")
        lines.append(f"  Revenue growth:        {financial.revenue_growth_percent:+.1f}%")
        lines.append(f"  Avg shift cost:        ${financial.average_shift_cost:,.2f}")
        lines.append(f"  Cost per day:          ${financial.cost_per_day:,.2f}")
        lines.append(f"  Avg hourly wage:       ${financial.average_hourly_wage:,.2f}")
        lines.append(f"  Projected monthly:     ${financial.projected_monthly_earnings:,.2f}")
        lines.append("")

        reliability = bundle.reliability
        lines.append("RELIABILITY")
        lines.append("-" * 72)
        lines.append(f"  Past shifts:           {reliability.past_count}")
        lines.append(f"  Completed:             {reliability.completed_count}")
        lines.append(f"  Canceled:              {reliability.canceled_count}")
        lines.append(f"  No-shows:              {reliability.no_show_count}")
        lines.append(f"  Completion rate:       {reliability.completion_rate_percent:.1f}%")
        lines.append(f"  No-show rate:          {reliability.no_show_rate_percent:.1f}%")
        lines.append("")

        utilization = bundle.utilization
        lines.append("UTILIZATION")
        lines.append("-" * 72)
        lines.append(
            f"  Employees with shifts: {utilization.employees_with_at_least_one_shift}"
            f"/{utilization.assigned_employee_count}"
            f" ({utilization.utilization_percent:.1f}%)"
        )
        lines.append(f"  Avg tenure (months):   {utilization.average_tenure_months:.1f}")
        lines.append(f"  Avg reliability:       {utilization.average_reliability_percent:.1f}%")
        lines.append(f"  Top performers:        {utilization.top_performer_count}")
        if utilization.top_employees:
            lines.append("  Most shifts:")
            for summary in utilization.top_employees:
                lines.append(
                    f"    {summary.name[:24]:<24} {summary.shift_count:>4} shifts "
                    f"{summary.total_hours:>7.1f}h ${summary.total_earnings:>10,.2f}"
                )
        lines.append("")

        lines.extend(self._distribution_lines(bundle))
        lines.extend(self._history_lines(bundle))

        if bundle.warnings:
            lines.append("DATA WARNINGS")
            lines.append("-" * 72)
            for warning in bundle.warnings:
                lines.append(f"  {warning}")
            lines.append("")

        return "\n".join(lines)

    def _distribution_lines(self, bundle: InsightsBundle) -> list[str]:
        distribution = bundle.distribution
        lines = ["DISTRIBUTION", "-" * 72]

        window = distribution.busiest_window
        lines.append(
            f"  Busiest window:        {window.start_hour:02d}:00-{window.end_hour:02d}:00 "
            f"({window.count} shift starts)"
        )
        lines.append(f"  Most common length:    {distribution.most_common_duration_hours}h")
        lines.append(f"  Average length:        {distribution.average_shift_length_hours:.1f}h")
        day_parts = distribution.counts_by_time_of_day
        lines.append(
            f"  Day parts:             morning {day_parts.morning}, "
            f"afternoon {day_parts.afternoon}, evening {day_parts.evening}, "
            f"night {day_parts.night}"
        )
        lines.append("")

        lines.append("  Shift starts by weekday:")
        max_weekday = max(distribution.counts_by_weekday) or 1
        for name, count in zip(WEEKDAY_NAMES, distribution.counts_by_weekday):
            bar = "#" * int(count / max_weekday * self.bar_width)
            lines.append(f"    {name} {count:>4} {bar}")
        lines.append("")

        lines.append("  Shift starts by hour:")
        max_hour = max(distribution.hour_counts) or 1
        for hour, count in enumerate(distribution.hour_counts):
            if count == 0:
                continue
            bar = "#" * int(count / max_hour * self.bar_width)
            lines.append(f"    {hour:02d}:00 {count:>4} {bar}")
        lines.append("")
        return lines

    def _history_lines(self, bundle: InsightsBundle) -> list[str]:
        lines = [f"HISTORY ({bundle.history_order.value.replace('_', ' ')})", "-" * 72]
        lines.append(f"  {'Month':<10} {'Hours':>9} {'Earnings':>13} {'Employees':>10}")
        for point in bundle.history:
            lines.append(
                f"  {point.period_label:<10} {point.total_hours:>9.1f} "
                f"${point.total_earnings:>12,.2f} {point.distinct_employee_count:>10}"
            )
        lines.append("")
        return lines
