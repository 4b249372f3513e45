from pathlib import Path
from datetime import datetime
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
import logging

from domain.entities import ApplicationRecord

PRIMARY = colors.HexColor('#c2410c')
SECONDARY = colors.HexColor('#9a3412')
BOX_BACKGROUND = colors.HexColor('#fff7ed')


class CertificatePDFGenerator:
    """Generates the marriage certificate PDF for an application."""

    def __init__(self, issuer: str = "Nikah Registry"):
        self.issuer = issuer
        self.logger = logging.getLogger(self.__class__.__name__)
        self._register_fonts()
        self.styles = self._create_styles()

    def _register_fonts(self):
        """Register a TrueType font so names outside Latin-1 print correctly."""
        font_path = "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf"
        bold_font_path = "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf"

        self.font_name = 'Helvetica'
        self.bold_font_name = 'Helvetica-Bold'
        if not (Path(font_path).exists() and Path(bold_font_path).exists()):
            self.logger.warning("LiberationSans not found. Falling back to Helvetica.")
            return

        try:
            pdfmetrics.registerFont(TTFont('CertificateFont', font_path))
            pdfmetrics.registerFont(TTFont('CertificateFont-Bold', bold_font_path))
        except Exception as e:
            self.logger.error(f"Font registration failed, using Helvetica: {e}")
            return
        self.font_name = 'CertificateFont'
        self.bold_font_name = 'CertificateFont-Bold'

    def _create_styles(self):
        """Create custom styles for the certificate."""
        styles = getSampleStyleSheet()

        styles.add(ParagraphStyle(
            name='CertificateTitle',
            parent=styles['Heading1'],
            fontName=self.bold_font_name,
            fontSize=28,
            textColor=PRIMARY,
            spaceAfter=6,
            alignment=1  # Center
        ))

        styles.add(ParagraphStyle(
            name='CertificateSubtitle',
            parent=styles['Normal'],
            fontName=self.bold_font_name,
            fontSize=12,
            textColor=SECONDARY,
            spaceAfter=24,
            alignment=1
        ))

        styles.add(ParagraphStyle(
            name='PartyHeader',
            parent=styles['Heading2'],
            fontName=self.bold_font_name,
            fontSize=14,
            textColor=SECONDARY,
            spaceBefore=12,
            spaceAfter=8
        ))

        styles.add(ParagraphStyle(
            name='CertificateBody',
            parent=styles['Normal'],
            fontName=self.font_name,
            fontSize=11,
            leading=15,
            spaceAfter=8
        ))

        styles.add(ParagraphStyle(
            name='CertificateFooter',
            parent=styles['Normal'],
            fontName=self.font_name,
            fontSize=9,
            textColor=colors.grey,
            alignment=1
        ))

        return styles

    def generate(self, record: ApplicationRecord, output_path: Path) -> str:
        """
        Build the certificate for ``record`` at ``output_path``.

        Returns:
            The written path as a string
        """
        doc = SimpleDocTemplate(
            str(output_path),
            pagesize=A4,
            rightMargin=50, leftMargin=50,
            topMargin=60, bottomMargin=50
        )

        story = []

        # 1. Header
        story.append(Paragraph("MARRIAGE CERTIFICATE", self.styles["CertificateTitle"]))
        story.append(Paragraph("OFFICIAL RECORD OF NIKAH", self.styles["CertificateSubtitle"]))
        story.append(Paragraph(
            f"Certificate # {escape(record.application_number)}",
            ParagraphStyle('Number', parent=self.styles["CertificateBody"], alignment=1, textColor=SECONDARY)
        ))
        story.append(Spacer(1, 20))

        # 2. Parties
        story.append(Paragraph("Groom", self.styles["PartyHeader"]))
        self._add_party_box(story, record.groom_full_name)
        story.append(Paragraph("Bride", self.styles["PartyHeader"]))
        self._add_party_box(story, record.bride_full_name)

        # 3. Record details
        story.append(Paragraph("Record Details", self.styles["PartyHeader"]))
        details = [
            ["Application Number:", record.application_number],
            ["Approved On:", self._format_date(record.approved_at)],
            ["Documents Verified:", self._format_date(record.documents_verified_at) if record.documents_required else "Not required"],
            ["Issued On:", self._format_date(record.certificate_generated_at)],
        ]
        self._add_table(story, details)

        # 4. Footer
        story.append(Spacer(1, 40))
        story.append(Paragraph(
            f"Issued by {escape(self.issuer)}. This certificate was generated electronically.",
            self.styles["CertificateFooter"]
        ))

        doc.build(story)
        self.logger.info(f"Certificate PDF generated: {output_path}")
        return str(output_path)

    @staticmethod
    def _format_date(value: Optional[datetime]) -> str:
        return value.strftime('%d.%m.%Y') if value else "-"

    def _add_party_box(self, story, full_name: Optional[str]):
        box = Table([[full_name or "-"]], colWidths=[490])
        box.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, -1), self.bold_font_name),
            ('FONTSIZE', (0, 0), (-1, -1), 14),
            ('BACKGROUND', (0, 0), (-1, -1), BOX_BACKGROUND),
            ('BOX', (0, 0), (-1, -1), 1, PRIMARY),
            ('TOPPADDING', (0, 0), (-1, -1), 12),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 12),
            ('LEFTPADDING', (0, 0), (-1, -1), 12),
        ]))
        story.append(box)
        story.append(Spacer(1, 10))

    def _add_table(self, story, data, col_widths=(150, 340)):
        """Helper to add styled key/value table."""
        t = Table(data, colWidths=list(col_widths))
        t.setStyle(TableStyle([
            ('FONTNAME', (0, 0), (-1, -1), self.font_name),
            # Key column
            ('FONTNAME', (0, 0), (0, -1), self.bold_font_name),
            ('TEXTCOLOR', (0, 0), (0, -1), SECONDARY),
            ('ALIGN', (0, 0), (0, -1), 'LEFT'),
            # Layout
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('BOTTOMPADDING', (0, 0), (-1, -1), 8),
            ('TOPPADDING', (0, 0), (-1, -1), 8),
            ('LINEBELOW', (0, 0), (-1, -1), 0.5, colors.HexColor('#fed7aa')),
        ]))
        story.append(t)
        story.append(Spacer(1, 15))
