"""Wave codec, envelope and trim-point helpers."""
