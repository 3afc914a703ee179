"""Report composer exports."""

from threatdash.reporting.composer import GenerationError, InvalidReportOptionError, ReportComposer
from threatdash.reporting.deliverer import DirectoryFileSaver, DownloadCapture, FileSaver
from threatdash.reporting.statistics import SampleStatisticsProvider, StatisticsProvider

__all__ = [
    "DirectoryFileSaver",
    "DownloadCapture",
    "FileSaver",
    "GenerationError",
    "InvalidReportOptionError",
    "ReportComposer",
    "SampleStatisticsProvider",
    "StatisticsProvider",
]
