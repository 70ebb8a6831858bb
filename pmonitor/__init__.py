"""p-monitor: periodic host resource sampling.

Samples disk, memory, CPU and GPU utilization on a background thread and
keeps the latest snapshot available to a presentation layer.
"""

__version__ = "0.1.0"
