"""GPU metrics collection through vendor command-line tools.

Each vendor collector shells out to one external program and parses its text
output. A vendor whose program is not installed is skipped silently. The
output formats of these tools are not stable interfaces, so each parser is a
standalone function that can be tested against captured output.

Vendors, in the order their results are reported:
    nvidia-smi: NVIDIA discrete GPUs, one entry per card
    radeontop: AMD discrete GPU, a single entry
    lspci: Integrated GPU placeholder
"""

# Standard library imports
import logging
import re
from typing import List, Optional, Sequence

# Local imports
from pmonitor.core.errors import CommandError
from pmonitor.core.models import GPUMetrics, GPUType
from pmonitor.utils.platform import PlatformUtils

logger = logging.getLogger(__name__)

NVIDIA_QUERY = [
    "nvidia-smi",
    "--query-gpu=index,name,utilization.gpu,temperature.gpu",
    "--format=csv,noheader,nounits",
]
RADEONTOP_QUERY = ["radeontop", "-l", "1", "-d", "-"]
LSPCI_QUERY = ["lspci", "-v"]

RADEONTOP_USAGE = re.compile(r"gpu\s+(\d+\.?\d*)%")
INTEGRATED_VENDORS = ("Intel", "AMD")
INTEGRATED_PLACEHOLDER_ERROR = "Integrated GPU monitoring not fully implemented"


# ----------------------------
# Parsers
# ----------------------------


def _parse_float(value: str, field_name: str) -> float:
    try:
        return float(value)
    except ValueError:
        logger.error(f"Failed to parse GPU {field_name}: {value!r}")
        return 0.0


def parse_nvidia_line(line: str) -> Optional[GPUMetrics]:
    """Parse one line of ``nvidia-smi --format=csv,noheader,nounits`` output.

    Expected columns: index, name, utilization.gpu, temperature.gpu.
    Numeric columns that do not parse (e.g. "[N/A]") fall back to 0.0.

    Args:
        line: A single output line.

    Returns:
        GPU metrics, or None if the line has fewer than four columns.

    Example:
        >>> gpu = parse_nvidia_line("0, Test GPU, 45.5, 62.0")
        >>> gpu.usage_percent, gpu.temperature
        (45.5, 62.0)
    """
    parts = [part.strip() for part in line.split(",")]
    if len(parts) < 4:
        logger.error(f"Invalid nvidia-smi output line: {line!r}")
        return None

    index, name, usage, temperature = parts[:4]
    return GPUMetrics(
        name=f"NVIDIA GPU {index} ({name})",
        type=GPUType.NVIDIA,
        usage_percent=_parse_float(usage, "usage"),
        temperature=_parse_float(temperature, "temperature"),
    )


def parse_nvidia_output(output: str) -> List[GPUMetrics]:
    """Parse full nvidia-smi output, skipping blank and malformed lines."""
    gpus = []
    for line in output.strip().splitlines():
        if not line.strip():
            continue
        gpu = parse_nvidia_line(line)
        if gpu is not None:
            gpus.append(gpu)
    return gpus


def parse_radeontop_output(output: str) -> Optional[GPUMetrics]:
    """Extract GPU usage from radeontop dump output.

    Only the first line carrying a ``gpu NN.NN%`` field is used, so at most
    one GPU is reported. radeontop does not report temperature.

    Args:
        output: Text written by ``radeontop -l 1 -d -``.

    Returns:
        GPU metrics, or None if no usage figure was found.

    Example:
        >>> gpu = parse_radeontop_output("1700000000.000: bus 03, gpu 12.50%, ee 0.00%")
        >>> gpu.usage_percent
        12.5
    """
    for line in output.splitlines():
        if "gpu" not in line or "%" not in line:
            continue
        match = RADEONTOP_USAGE.search(line)
        if match is None:
            continue
        try:
            usage = float(match.group(1))
        except ValueError:
            continue
        return GPUMetrics(name="AMD GPU", type=GPUType.AMD, usage_percent=usage)

    return None


def detect_integrated_gpu(output: str) -> Optional[GPUMetrics]:
    """Look for an integrated graphics controller in lspci output.

    Usage of integrated GPUs is not measured; when one is found a placeholder
    entry is returned with an explanatory error so the display shows N/A.

    Args:
        output: Text written by ``lspci -v``.

    Returns:
        Placeholder GPU metrics, or None if no integrated GPU is mentioned.
    """
    if "VGA" in output and any(vendor in output for vendor in INTEGRATED_VENDORS):
        return GPUMetrics(
            name="Integrated GPU",
            type=GPUType.INTEGRATED,
            usage_percent=0.0,
            temperature=None,
            error=INTEGRATED_PLACEHOLDER_ERROR,
        )
    return None


# ----------------------------
# Vendor collectors
# ----------------------------


class VendorGPUCollector:
    """Base class for collectors backed by one external program.

    Subclasses set ``command`` and ``query`` and implement ``parse``.

    Attributes:
        platform: Platform utilities used to find and run the program.
    """

    command = ""
    query: Sequence[str] = ()
    failure_level = logging.ERROR

    def __init__(self, platform_utils: Optional[PlatformUtils] = None):
        self.platform = platform_utils or PlatformUtils()

    def is_available(self) -> bool:
        """Check if the vendor tool is installed."""
        return self.platform.command_exists(self.command)

    def parse(self, output: str) -> List[GPUMetrics]:
        raise NotImplementedError

    def collect(self) -> List[GPUMetrics]:
        """Run the vendor tool and parse its output.

        Returns:
            Detected GPUs; empty if the tool is missing or fails.
        """
        if not self.is_available():
            logger.debug(f"{self.command} not found, skipping")
            return []

        try:
            output = self.platform.run_command(self.query)
        except CommandError as e:
            logger.log(self.failure_level, f"Failed to run {self.command}: {e}")
            return []

        return self.parse(output)


class NvidiaGPUCollector(VendorGPUCollector):
    """NVIDIA GPUs via nvidia-smi."""

    command = "nvidia-smi"
    query = NVIDIA_QUERY

    def parse(self, output: str) -> List[GPUMetrics]:
        return parse_nvidia_output(output)


class AMDGPUCollector(VendorGPUCollector):
    """AMD GPU via radeontop (single card)."""

    command = "radeontop"
    query = RADEONTOP_QUERY

    def parse(self, output: str) -> List[GPUMetrics]:
        gpu = parse_radeontop_output(output)
        return [gpu] if gpu is not None else []


class IntegratedGPUCollector(VendorGPUCollector):
    """Integrated GPU presence via lspci."""

    command = "lspci"
    query = LSPCI_QUERY

    # lspci failing only means we cannot tell, so keep it quiet.
    failure_level = logging.DEBUG

    def parse(self, output: str) -> List[GPUMetrics]:
        gpu = detect_integrated_gpu(output)
        return [gpu] if gpu is not None else []


class GPUCollector:
    """Aggregates all vendor GPU collectors.

    Results are concatenated in vendor order. A vendor without its tool adds
    nothing, so a machine with no GPU tooling yields an empty list.

    Attributes:
        vendors: Vendor collectors, queried in order.

    Example:
        >>> gpu = GPUCollector()
        >>> for metrics in gpu.collect():
        ...     print(metrics.name, metrics.usage_percent)
    """

    def __init__(
        self,
        vendors: Optional[Sequence[VendorGPUCollector]] = None,
        platform_utils: Optional[PlatformUtils] = None,
    ):
        if vendors is None:
            platform_utils = platform_utils or PlatformUtils()
            vendors = (
                NvidiaGPUCollector(platform_utils),
                AMDGPUCollector(platform_utils),
                IntegratedGPUCollector(platform_utils),
            )
        self.vendors = tuple(vendors)

    def collect(self) -> List[GPUMetrics]:
        """Collect metrics from every available vendor.

        Returns:
            Ordered list of GPU metrics, possibly empty.
        """
        gpus: List[GPUMetrics] = []
        for vendor in self.vendors:
            try:
                gpus.extend(vendor.collect())
            except Exception as e:
                logger.error(
                    f"Error collecting GPU metrics from {vendor.command or vendor}: {e}",
                    exc_info=True,
                )

        if gpus:
            logger.debug(f"Detected {len(gpus)} GPU(s)")
        return gpus
