raise RuntimeError("private packages are never imported")
