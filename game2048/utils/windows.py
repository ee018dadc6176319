# -*- coding: utf-8 -*-
"""
Graphical User Interface for the 2048 game.

This module draws a game snapshot in a Matplotlib window and forwards keyboard events. It only ever reads
a :class:`GameStateView`; the engine state is never touched from here.
"""
from typing import Callable, Optional

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event

from game2048.core.state import GameStateView

# ##: Default Matplotlib shortcuts that collide with the game keys.
_CONFLICTING_KEYMAPS = ("keymap.back", "keymap.forward", "keymap.save")


class WindowBoard:
    """
    A class for rendering the 2048 game board using Matplotlib.

    Methods
    -------
    show_view(view: GameStateView)
        Update the display with a game snapshot.
    show_message(message: str)
        Display a one-line status message under the board.
    register_key_handler(key_handler: Callable, release_handler: Callable, leave_handler: Callable)
        Register functions to handle keyboard events.
    show(block: bool = True)
        Display the game window.
    close()
        Close the game window.
    """

    # ##: Colors mapping for different tile values.
    COLORS = {
        0: "#CDC1B4",
        2: "#EEE4DA",
        4: "#EDE0C8",
        8: "#F2B179",
        16: "#F59563",
        32: "#F67C5F",
        64: "#F65E3B",
        128: "#EDCF72",
        256: "#EDCC61",
        512: "#EDC850",
        1024: "#EDC53F",
        2048: "#EDC22E",
    }

    # ##: Dark text on light tiles, light text on the others.
    DARK_TEXT = "#776E65"
    LIGHT_TEXT = "#F9F6F2"

    def __init__(self, title: str, size: int):
        """
        Initialize the game board window.

        Parameters
        ----------
        title : str
            The title of the window.
        size : int
            The size of the game board (e.g., 4 for a 4x4 board).
        """
        for keymap in _CONFLICTING_KEYMAPS:
            plt.rcParams[keymap] = []

        self.fig, self.axe = plt.subplots()
        self.fig.canvas.manager.set_window_title(title)
        self._setup_axes(size)
        self.closed = False
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

    def _setup_axes(self, size: int):
        """
        Set up the axes for the game board: one subplot per tile, a score line on top and a status line below.

        Parameters
        ----------
        size : int
            The size of the game board.
        """
        self.fig.subplots_adjust(left=0.02, bottom=0.08, right=0.98, top=0.9, wspace=0.05, hspace=0.05)
        self.fig.set_facecolor("#BBADA0")
        self.axe.set_axis_off()

        self.score_text = self.fig.text(0.02, 0.95, "", ha="left", va="center", fontsize="x-large", color="white")
        self.banner_text = self.fig.text(0.98, 0.95, "", ha="right", va="center", fontsize="x-large")
        self.status_text = self.fig.text(0.5, 0.03, "", ha="center", va="center", color="white")

        self.texts = []
        self.axes = [self.fig.add_subplot(size, size, r * size + c + 1) for r in range(size) for c in range(size)]
        for ax in self.axes:
            text = ax.text(0.5, 0.5, "", ha="center", va="center", fontsize="x-large", fontweight="demibold")
            self.texts.append(text)
            ax.set_xticks([])
            ax.set_yticks([])

    def _close_handler(self, event: Optional[Event] = None):
        """
        Handle the window close event.

        Parameters
        ----------
        event : Optional[Event]
            The close event (not used but required for event handling).
        """
        self.closed = True

    def show_view(self, view: GameStateView):
        """
        Show or update the game board.

        Parameters
        ----------
        view : GameStateView
            The snapshot to display.

        Notes
        -----
        - Tiles above 2048 reuse the 2048 color.
        - "Game over!" takes precedence over "You win!".
        """
        for ax, text, value in zip(self.axes, self.texts, view.board.flat):
            value = int(value)
            text.set_text(str(value) if value != 0 else "")
            text.set_color(self.DARK_TEXT if value <= 4 else self.LIGHT_TEXT)
            text.set_fontsize("x-large" if value < 1000 else "large")
            ax.set_facecolor(self.COLORS.get(value, self.COLORS[2048]))

        self.score_text.set_text(f"Score: {view.score}")
        if view.game_over:
            self.banner_text.set_text("Game over!")
            self.banner_text.set_color("white")
        elif view.won:
            self.banner_text.set_text("You win!")
            self.banner_text.set_color("#FFD700")
        else:
            self.banner_text.set_text("")

        self._refresh()

    def show_message(self, message: str):
        self.status_text.set_text(message)
        self._refresh()

    def _refresh(self):
        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()

    def register_key_handler(
        self,
        key_handler: Callable,
        release_handler: Optional[Callable] = None,
        leave_handler: Optional[Callable] = None,
    ):
        """
        Register keyboard event handlers.

        Parameters
        ----------
        key_handler : Callable
            Called whenever a key is pressed in the window, auto-repeats included.
        release_handler : Callable, optional
            Called whenever a key is released.
        leave_handler : Callable, optional
            Called when the pointer leaves the window; key releases may be missed from then on.
        """
        self.fig.canvas.mpl_connect("key_press_event", key_handler)
        if release_handler is not None:
            self.fig.canvas.mpl_connect("key_release_event", release_handler)
        if leave_handler is not None:
            self.fig.canvas.mpl_connect("figure_leave_event", leave_handler)

    @classmethod
    def show(cls, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """
        Close the window.
        """
        plt.close(self.fig)
        self.closed = True
