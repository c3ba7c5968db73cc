
def inertia_linear(t:int, T_iter:int, w_start:float, w_end:float) -> float:
    # Map-and-Compass runs for the first T_iter/2 iterations
    return w_start - (w_start-w_end)*(t/(T_iter/2))
