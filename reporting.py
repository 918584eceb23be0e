import csv
from matplotlib.backends.backend_pdf import PdfPages
import matplotlib.pyplot as plt
from openpyxl.styles import Font
import pandas as pd


def _frames(preview):
    """One DataFrame per record kind, in preview order."""
    workdays = pd.DataFrame(
        [{'Date': w.date.isoformat(), 'Target Hours': w.target_hours, 'Break Minutes': w.break_minutes}
         for w in preview.workdays],
        columns=['Date', 'Target Hours', 'Break Minutes'])
    intervals = pd.DataFrame(
        [{'Date': i.workday_date.isoformat(), 'Start': i.start_time.strftime('%H:%M'),
          'End': i.end_time.strftime('%H:%M'), 'Break Minutes': i.break_minutes,
          'Hours': round(i.duration_hours(), 2)}
         for i in preview.worktimes],
        columns=['Date', 'Start', 'End', 'Break Minutes', 'Hours'])
    vacations = pd.DataFrame(
        [{'Start Date': v.start_date.isoformat(),
          'End Date': v.end_date.isoformat() if v.end_date else '',
          'Type': v.type.value, 'Notes': v.notes or ''}
         for v in preview.vacations],
        columns=['Start Date', 'End Date', 'Type', 'Notes'])
    unmatched = pd.DataFrame(
        [{'Table': f.table, 'Legacy ID': f.legacy_id, 'Reason': f.reason} for f in preview.failed],
        columns=['Table', 'Legacy ID', 'Reason'])
    return {'Workdays': workdays, 'Intervals': intervals, 'Vacations': vacations, 'Unmatched': unmatched}


def export_preview_to_csv(filepath, preview):
    """
    Export the preview as consecutive CSV sections:
      a title row, the header and records, then a blank row.
    """
    with open(filepath, 'w', newline='') as f:
        writer = csv.writer(f)
        for title, df in _frames(preview).items():
            writer.writerow([title])
            df.to_csv(f, index=False, lineterminator='\r\n')
            writer.writerow([])


def export_preview_to_xlsx(filepath, preview):
    """XLSX workbook with one sheet per record kind."""
    with pd.ExcelWriter(filepath, engine='openpyxl') as writer:
        for sheet, df in _frames(preview).items():
            df.to_excel(writer, index=False, sheet_name=sheet)
            worksheet = writer.sheets[sheet]

            # Bold the header row
            header_font = Font(bold=True)
            for cell in worksheet[1]:
                cell.font = header_font

            # Auto‑size columns
            for col_cells in worksheet.columns:
                max_length = max(len(str(cell.value)) for cell in col_cells)
                worksheet.column_dimensions[col_cells[0].column_letter].width = max_length + 2


def generate_pdf_report(filepath, preview):
    """
    PDF report: bar chart of net worked hours per migrated day.
    """
    daily = {}
    for interval in preview.worktimes:
        daily[interval.workday_date] = daily.get(interval.workday_date, 0) + interval.duration_hours()

    dates = sorted(daily)
    hours = [daily[d] for d in dates]

    fig, ax = plt.subplots()
    ax.bar([d.strftime('%Y-%m-%d') for d in dates], hours)
    ax.axhline(0, color='black', linewidth=0.5)
    ax.set_title('Migrated Hours per Day')
    ax.set_xlabel('Date')
    ax.set_ylabel('Hours')
    plt.xticks(rotation=45, ha='right')
    plt.tight_layout()

    with PdfPages(filepath) as pdf:
        pdf.savefig(fig)
        plt.close(fig)
