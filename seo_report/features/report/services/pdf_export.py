import base64
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from selenium import webdriver
from selenium.common.exceptions import WebDriverException
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from selenium.webdriver.common.print_page_options import PrintOptions
from webdriver_manager.chrome import ChromeDriverManager

from seo_report.features.report.exceptions import PdfExportError
from seo_report.platform.config import settings
from seo_report.platform.logger import get_logger

logger = get_logger("pdf_export")

# A4 in centimetres; 20px margins at 96 dpi
A4_WIDTH_CM = 21.0
A4_HEIGHT_CM = 29.7
MARGIN_CM = 0.53


class PdfConverter(Protocol):
    def convert(self, html: str) -> bytes: ...


class ChromePdfConverter:
    """Prints an HTML document to A4 PDF pages with headless Chrome."""

    def __init__(self, timeout: Optional[int] = None, binary_location: Optional[str] = None):
        self.timeout = timeout or settings.PDF_RENDER_TIMEOUT
        self.binary_location = binary_location or settings.CHROME_BINARY

    def _chrome_options(self) -> Options:
        chrome_options = Options()
        chrome_options.add_argument("--headless=new")
        chrome_options.add_argument("--no-sandbox")
        chrome_options.add_argument("--disable-dev-shm-usage")
        chrome_options.add_argument("--disable-gpu")
        if self.binary_location:
            chrome_options.binary_location = self.binary_location
        return chrome_options

    @staticmethod
    def print_options() -> PrintOptions:
        options = PrintOptions()
        options.orientation = "portrait"
        options.page_width = A4_WIDTH_CM
        options.page_height = A4_HEIGHT_CM
        options.margin_top = MARGIN_CM
        options.margin_bottom = MARGIN_CM
        options.margin_left = MARGIN_CM
        options.margin_right = MARGIN_CM
        options.background = True
        return options

    def _start_driver(self):
        service = Service(ChromeDriverManager().install())
        return webdriver.Chrome(service=service, options=self._chrome_options())

    def convert(self, html: str) -> bytes:
        driver = None
        fd, path = tempfile.mkstemp(suffix=".html", prefix="seo-report-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(html)

            driver = self._start_driver()
            driver.set_page_load_timeout(self.timeout)

            logger.info(f"Printing report to PDF ({len(html)} bytes of HTML)")
            driver.get(Path(path).as_uri())
            encoded = driver.print_page(self.print_options())
            return base64.b64decode(encoded)
        except WebDriverException as e:
            logger.error(f"Headless Chrome failed to print report: {e}")
            raise PdfExportError(f"PDF generation failed: {e.msg or e}") from e
        except (OSError, ValueError) as e:
            logger.error(f"PDF export failed: {e}")
            raise PdfExportError(f"PDF generation failed: {e}") from e
        finally:
            if driver:
                driver.quit()
            if os.path.exists(path):
                os.remove(path)
