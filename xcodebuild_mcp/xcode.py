#!/usr/bin/env python3
"""Xcode platforms and xcodebuild destination strings"""

from enum import Enum
from typing import Optional

from xcodebuild_mcp.exceptions import InvalidParameterError


class XcodePlatform(str, Enum):
    IOS = "iOS"
    WATCHOS = "watchOS"
    TVOS = "tvOS"
    VISIONOS = "visionOS"
    IOS_SIMULATOR = "iOS Simulator"
    WATCHOS_SIMULATOR = "watchOS Simulator"
    TVOS_SIMULATOR = "tvOS Simulator"
    VISIONOS_SIMULATOR = "visionOS Simulator"
    MACOS = "macOS"


SIMULATOR_PLATFORMS = frozenset({
    XcodePlatform.IOS_SIMULATOR,
    XcodePlatform.WATCHOS_SIMULATOR,
    XcodePlatform.TVOS_SIMULATOR,
    XcodePlatform.VISIONOS_SIMULATOR,
})

DEVICE_PLATFORMS = frozenset({
    XcodePlatform.IOS,
    XcodePlatform.WATCHOS,
    XcodePlatform.TVOS,
    XcodePlatform.VISIONOS,
})


def is_simulator_platform(platform: XcodePlatform) -> bool:
    return XcodePlatform(platform) in SIMULATOR_PLATFORMS


def construct_destination_string(platform: XcodePlatform,
                                 simulator_name: Optional[str] = None,
                                 simulator_id: Optional[str] = None,
                                 use_latest: bool = True,
                                 arch: Optional[str] = None,
                                 device_id: Optional[str] = None) -> str:
    """
    Build the value for xcodebuild's -destination flag.

    A simulator ID takes precedence over a name since it identifies the
    simulator uniquely. Devices without an ID get a generic destination.

    Raises:
        InvalidParameterError: for a simulator platform with neither name nor ID
    """
    platform = XcodePlatform(platform)

    if platform in SIMULATOR_PLATFORMS:
        if simulator_id:
            return f"platform={platform.value},id={simulator_id}"
        if simulator_name:
            return f"platform={platform.value},name={simulator_name}{',OS=latest' if use_latest else ''}"
        raise InvalidParameterError(
            f"For {platform.value} platform, either simulatorId or simulatorName must be provided"
        )

    if platform == XcodePlatform.MACOS:
        return f"platform=macOS,arch={arch}" if arch else "platform=macOS"

    if device_id:
        return f"platform={platform.value},id={device_id}"
    return f"generic/platform={platform.value}"
