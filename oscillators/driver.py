# SPDX-FileCopyrightText: Copyright (c) 2025 NBEL
# SPDX-License-Identifier: Apache-2.0
"""
Frame driver: the animation clock around a SimulationSession.

Every frame performs exactly one session.step() followed by one publish
of the resulting snapshot. Frames are chained with tokens: start() arms a
token, each tick(token) returns the token for the next frame, and
pause()/reset() disarm it. A tick carrying a token from an earlier run is
ignored, so a frame scheduled before a stop can never step the state.

Usage:
    driver = FrameDriver(session, on_frame=renderer_callback)
    token = driver.start()
    while token is not None:
        token = driver.tick(token)
        wait_for_next_frame()
"""

import time
from typing import Any, Callable, Optional

import pygame


class FrameDriver:
    """
    Single-threaded, cooperative clock for one simulation session.

    Attributes:
        session: The driven SimulationSession
        on_frame: Called with the snapshot after each integrated frame
        frame_count: Frames integrated since the last reset
    """

    def __init__(
        self,
        session,
        on_frame: Optional[Callable[[Any], None]] = None,
        verbose: bool = False,
        progress_interval: int = 100,
    ):
        self.session = session
        self.on_frame = on_frame
        self.verbose = verbose
        self.progress_interval = progress_interval

        self.frame_count = 0
        self._generation = 0
        self._token: Optional[int] = None

    @property
    def token(self) -> Optional[int]:
        """Token of the currently armed frame, or None when stopped."""
        return self._token

    # ------------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------------

    def start(self) -> int:
        """Enter RUNNING and arm a fresh frame token."""
        self.session.start()
        return self._arm()

    def pause(self):
        self.session.pause()
        self._disarm()

    def toggle(self) -> Optional[int]:
        if self.session.running:
            self.pause()
            return None
        return self.start()

    def reset(self):
        self._disarm()
        self.session.reset()
        self.frame_count = 0

    # ------------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------------

    def tick(self, token: Optional[int]) -> Optional[int]:
        """
        Run one frame if token is still current.

        Returns:
            Token for the next frame, or None if the loop must stop
        """
        if token is None or token != self._token or not self.session.running:
            return None

        snapshot = self.session.step()
        self.frame_count += 1

        if self.on_frame is not None:
            self.on_frame(snapshot)

        if self.verbose and self.frame_count % self.progress_interval == 0:
            print(f"t={snapshot.t:.2f}s | frames={self.frame_count}")

        # on_frame may have paused or reset the session
        return self._token

    def run(self, frames: Optional[int] = None, fps: Optional[int] = 60):
        """
        Drive the session until it is stopped or `frames` frames have run.

        Args:
            frames: Maximum number of frames to integrate (None runs until
                pause() or reset() is called, e.g. from on_frame)
            fps: Pace the loop with pygame.time.Clock, or run unpaced if None

        Returns:
            Final snapshot
        """
        clock = pygame.time.Clock() if fps else None
        token = self._token if self.session.running and self._token is not None else self.start()

        start_time = time.perf_counter()
        count = 0
        while token is not None and (frames is None or count < frames):
            token = self.tick(token)
            count += 1
            if clock is not None:
                clock.tick(fps)

        if self.verbose:
            elapsed = max(time.perf_counter() - start_time, 1e-6)
            print(f"Ran {count} frames in {elapsed:.2f}s ({count / elapsed:.1f} fps)")

        return self.session.snapshot()

    def _arm(self) -> int:
        self._generation += 1
        self._token = self._generation
        return self._token

    def _disarm(self):
        self._token = None
