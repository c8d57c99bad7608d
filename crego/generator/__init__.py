"""Writing rendered project files safely, the errors raised doing so, and template helper functions."""