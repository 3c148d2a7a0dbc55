"""
Default QC thresholds for rendered songs.
"""
QC_THRESHOLDS = {
    "peak_dbfs_max": 0.0,  # Anything above full scale is clamped by the encoder
    "silence_rms_max": 1e-6,  # Below this the render is reported as silent
}
