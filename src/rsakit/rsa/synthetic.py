"""
Synthetic stimulus and neural data for RSA demonstrations and tests.

Stimuli are items described by random features. Neural responses are a
random linear read-out of those features across a population of units
plus independent Gaussian noise, so the neural geometry follows the
stimulus geometry more closely the lower the noise.
"""

import numpy as np

from ..utils.data import as_item_matrix, check_nonnegative, check_positive


def _get_rng(random_state):
    # Local generator, never touches the global numpy state
    if isinstance(random_state, np.random.RandomState):
        return random_state
    return np.random.RandomState(random_state)


def recycle(values, length):
    """
    Repeat a sequence end to end until it has ``length`` elements.

    This is the explicit form of vector recycling: a shorter sequence is
    tiled against a longer one. Only whole repetitions are allowed.

    Parameters
    ----------
    values : array-like
        1-D sequence to repeat. Must not be empty.
    length : int
        Target length. Must be a positive multiple of ``len(values)``.

    Returns
    -------
    np.ndarray
        Array of ``length`` elements.

    Raises
    ------
    ValueError
        If ``values`` is empty or not 1-D, or ``length`` is not a positive
        multiple of its length.

    Examples
    --------
    >>> recycle([1, 2, 3], 6)
    array([1, 2, 3, 1, 2, 3])
    >>> recycle(['a', 'b'], 3)
    Traceback (most recent call last):
    ...
    ValueError: Cannot recycle 2 values to length 3: length must be a multiple of 2
    """
    values = np.asarray(values)
    if values.ndim != 1 or values.size == 0:
        raise ValueError(f"values must be a non-empty 1-D sequence, got shape {values.shape}")
    check_positive(length=length)
    if length % values.size != 0:
        raise ValueError(
            f"Cannot recycle {values.size} values to length {length}: "
            f"length must be a multiple of {values.size}"
        )
    return np.tile(values, length // values.size)


def generate_stimulus_features(n_items, n_features, random_state=None):
    """
    Draw an item-by-feature matrix of standard normal stimulus features.

    Parameters
    ----------
    n_items : int
        Number of stimuli (rows).
    n_features : int
        Number of features per stimulus (columns).
    random_state : int or np.random.RandomState, optional
        Seed or generator for reproducibility.

    Returns
    -------
    np.ndarray
        Array of shape (n_items, n_features).
    """
    check_positive(n_items=n_items, n_features=n_features)
    rng = _get_rng(random_state)
    return rng.randn(int(n_items), int(n_features))


def generate_neural_responses(stimuli, n_units, noise_level=1.0, random_state=None):
    """
    Simulate population responses to a set of stimuli.

    Each unit responds with a random weighted sum of the stimulus
    features. Weights are drawn from N(0, 1/n_units) so that pairwise
    distances between items are preserved on average. Independent
    Gaussian noise with standard deviation ``noise_level`` is then added
    to every response.

    Parameters
    ----------
    stimuli : array-like of shape (n_items, n_features)
        Stimulus feature matrix.
    n_units : int
        Number of simulated neural units.
    noise_level : float, default 1.0
        Standard deviation of the additive noise. 0 gives a noiseless
        linear projection.
    random_state : int or np.random.RandomState, optional
        Seed or generator for reproducibility.

    Returns
    -------
    np.ndarray
        Responses of shape (n_items, n_units).
    """
    stimuli = as_item_matrix(stimuli, min_items=1)
    check_positive(n_units=n_units)
    check_nonnegative(noise_level=noise_level)
    rng = _get_rng(random_state)

    n_items, n_features = stimuli.shape
    n_units = int(n_units)
    weights = rng.randn(n_features, n_units) / np.sqrt(n_units)
    responses = stimuli @ weights
    if noise_level > 0:
        responses = responses + noise_level * rng.randn(n_items, n_units)
    return responses


def generate_rsa_dataset(
    n_items=10,
    n_features=5,
    n_units=50,
    noise_level=1.0,
    random_state=None,
):
    """
    Generate matching stimulus and neural matrices for an RSA comparison.

    Returns
    -------
    stimuli : np.ndarray
        Shape (n_items, n_features).
    neural : np.ndarray
        Shape (n_items, n_units).
    """
    rng = _get_rng(random_state)
    stimuli = generate_stimulus_features(n_items, n_features, random_state=rng)
    neural = generate_neural_responses(stimuli, n_units, noise_level=noise_level, random_state=rng)
    return stimuli, neural
