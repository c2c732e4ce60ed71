"""Audio input for WavSpectrum."""
