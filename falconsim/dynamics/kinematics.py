"""Euler-angle rotation and kinematics.

Rotation convention is the aerospace ZYX (yaw-pitch-roll) sequence. The
direction cosine matrix produced here maps body-frame vectors into the NED
frame; its transpose maps NED vectors into the body frame.

Body rates are converted to Euler-angle rates with

    [phi_dot, theta_dot, psi_dot] = W(phi, theta) @ [p, q, r]

    W = [[1, sin(phi) tan(theta), cos(phi) tan(theta)],
         [0, cos(phi),            -sin(phi)          ],
         [0, sin(phi)/cos(theta), cos(phi)/cos(theta)]]

W is undefined at theta = +/-90 deg (gimbal lock). The kernels use numpy
error semantics, so a zero cos(theta) yields inf/NaN instead of raising.

Example:
    >>> import numpy as np
    >>> from falconsim.dynamics import dcm_body_to_ned, euler_rates
    >>>
    >>> dcm = dcm_body_to_ned(np.array([0.0, 0.1, 1.57]))
    >>> rates = euler_rates(np.array([0.2, 0.1, 0.0]), np.array([0.0, 0.0, 0.5]))
"""

import numpy as np
from beartype import beartype
from numba import njit
from numpy.typing import NDArray

# =============================================================================
# Numba Kernels
# =============================================================================


@njit(cache=True, error_model="numpy")
def _dcm_body_to_ned(
    phi: float, theta: float, psi: float,
) -> tuple[float, float, float, float, float, float, float, float, float]:
    """Numba-optimized ZYX body-to-NED DCM, row-major."""
    cphi = np.cos(phi)
    sphi = np.sin(phi)
    ctheta = np.cos(theta)
    stheta = np.sin(theta)
    cpsi = np.cos(psi)
    spsi = np.sin(psi)

    return (
        cpsi*ctheta, cpsi*stheta*sphi - spsi*cphi, cpsi*stheta*cphi + spsi*sphi,
        spsi*ctheta, spsi*stheta*sphi + cpsi*cphi, spsi*stheta*cphi - cpsi*sphi,
        -stheta, ctheta*sphi, ctheta*cphi,
    )


@njit(cache=True, error_model="numpy")
def _euler_rates(
    phi: float, theta: float,
    p: float, q: float, r: float,
) -> tuple[float, float, float]:
    """Numba-optimized body-rate to Euler-rate transform (no singularity guard)."""
    sphi = np.sin(phi)
    cphi = np.cos(phi)
    ttheta = np.tan(theta)
    ctheta = np.cos(theta)

    return (
        p + sphi*ttheta*q + cphi*ttheta*r,
        cphi*q - sphi*r,
        (sphi/ctheta)*q + (cphi/ctheta)*r,
    )


# =============================================================================
# Public API
# =============================================================================


@beartype
def dcm_body_to_ned(orientation: NDArray[np.float64]) -> NDArray[np.float64]:
    """Direction cosine matrix from body frame to NED frame.

    Args:
        orientation: [roll, pitch, yaw] Euler angles [rad]

    Returns:
        3x3 DCM; ``dcm @ v_body`` gives the vector in NED
    """
    phi, theta, psi = orientation
    return np.array(_dcm_body_to_ned(phi, theta, psi)).reshape(3, 3)


@beartype
def dcm_ned_to_body(orientation: NDArray[np.float64]) -> NDArray[np.float64]:
    """Direction cosine matrix from NED frame to body frame."""
    return dcm_body_to_ned(orientation).T.copy()


@beartype
def euler_rate_matrix(roll: float, pitch: float) -> NDArray[np.float64]:
    """Body-rate to Euler-rate transform matrix W(roll, pitch).

    Args:
        roll: Roll angle [rad]
        pitch: Pitch angle [rad]

    Returns:
        3x3 matrix W such that W @ [p, q, r] = [roll_dot, pitch_dot, yaw_dot]
    """
    sphi, cphi = np.sin(roll), np.cos(roll)
    ttheta, ctheta = np.tan(pitch), np.cos(pitch)

    with np.errstate(divide="ignore", invalid="ignore"):
        return np.array([
            [1.0, sphi * ttheta, cphi * ttheta],
            [0.0, cphi, -sphi],
            [0.0, sphi / ctheta, cphi / ctheta],
        ])


@beartype
def euler_rates(
    orientation: NDArray[np.float64],
    angular_velocity: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Euler-angle rates from body angular velocity.

    Args:
        orientation: [roll, pitch, yaw] Euler angles [rad]
        angular_velocity: [p, q, r] body rates [rad/s]

    Returns:
        [roll_dot, pitch_dot, yaw_dot] [rad/s]
    """
    phi, theta, _ = orientation
    p, q, r = angular_velocity
    return np.array(_euler_rates(phi, theta, p, q, r))
