"""
Simple Talk - Tkinter (card-based) client

Flow:
1. Input card: learner types a Korean sentence and presses Translate.
2. The sentence is simplified by the backend, speech is synthesized for the
   simplified sentence, and the result card is raised.
3. Result card: original and simplified sentence, romanized pronunciations
   (click to hear them), English gloss and a word dictionary.

Setup (from repo root):

    python -m venv .venv
    source .venv/bin/activate   # or .venv\\Scripts\\activate on Windows
    pip install -e .

Optionally point the client at another backend in .env:
    SIMPLE_TALK_API_URL=https://simple-gje3.onrender.com

Then run:
    python main.py
"""

import threading
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Callable, Dict, Optional

from simple_talk.logger import logger, Timer
from simple_talk.audio import AudioPlayer
from simple_talk.flows import ERROR_TITLE, TTS_ERROR_TITLE, PlaybackFlow, TranslationFlow
from simple_talk.models import ResultPayload
from simple_talk.render import NO_WORD_DATA, build_view

logger.banner("Simple Talk - Starting Application")

ACCENT = "#f8cf01"
BACKGROUND = "#ffffff"
TEXT_COLOR = "#333333"
MUTED_COLOR = "#555555"
CARD_BACKGROUND = "#f9f9f9"


# ---------------------------------------------------------------------------
# Scrollable Frame Widget (the result card can exceed window height)
# ---------------------------------------------------------------------------

class ScrollableFrame(ttk.Frame):
    """
    A frame that provides vertical scrolling for its content.

    Usage:
        scrollable = ScrollableFrame(parent)
        scrollable.pack(fill="both", expand=True)
        ttk.Label(scrollable.content, text="Hello").pack()
    """

    def __init__(self, parent, **kwargs) -> None:
        super().__init__(parent, **kwargs)

        self.canvas = tk.Canvas(self, highlightthickness=0, background=BACKGROUND)
        self.scrollbar = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.content = ttk.Frame(self.canvas)
        self.content_window = self.canvas.create_window((0, 0), window=self.content, anchor="nw")

        self.canvas.configure(yscrollcommand=self.scrollbar.set)
        self.canvas.pack(side="left", fill="both", expand=True)
        self.scrollbar.pack(side="right", fill="y")

        self.content.bind("<Configure>", self._on_content_configure)
        self.canvas.bind("<Configure>", self._on_canvas_configure)
        # Only one scrollable view exists, so it can own the global wheel bindings
        self.canvas.bind_all("<MouseWheel>", self._on_mousewheel)
        self.canvas.bind_all("<Button-4>", lambda e: self.canvas.yview_scroll(-1, "units"))
        self.canvas.bind_all("<Button-5>", lambda e: self.canvas.yview_scroll(1, "units"))

    def _on_content_configure(self, event: tk.Event) -> None:
        self.canvas.configure(scrollregion=self.canvas.bbox("all"))

    def _on_canvas_configure(self, event: tk.Event) -> None:
        self.canvas.itemconfigure(self.content_window, width=event.width)

    def _on_mousewheel(self, event: tk.Event) -> None:
        if abs(event.delta) < 10:
            # macOS trackpad
            self.canvas.yview_scroll(-event.delta, "units")
        else:
            self.canvas.yview_scroll(int(-event.delta / 120), "units")

    def scroll_to_top(self) -> None:
        self.canvas.yview_moveto(0)


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

class SimpleTalkApp(tk.Tk):
    def __init__(self) -> None:
        super().__init__()
        logger.ui("Initializing SimpleTalkApp window...")

        self.title("Simple Talk")

        window_width = 480
        window_height = 760
        screen_width = self.winfo_screenwidth()
        screen_height = self.winfo_screenheight()
        center_x = int(screen_width / 2 - window_width / 2)
        center_y = int(screen_height / 2 - window_height / 2)
        self.geometry(f"{window_width}x{window_height}+{center_x}+{center_y}")
        self.minsize(360, 480)
        self.configure(bg=BACKGROUND)

        style = ttk.Style()
        style.theme_use("clam")
        style.configure("TFrame", background=BACKGROUND)
        style.configure("TLabel", background=BACKGROUND, foreground=TEXT_COLOR, font=("Helvetica", 15))
        style.configure("TButton", font=("Helvetica", 14))
        style.configure("Accent.TButton", background=ACCENT, foreground=TEXT_COLOR)
        style.map("Accent.TButton", background=[("active", "#e0b900"), ("disabled", "#eeeeee")])
        style.configure("Tts.TButton", background="#eeeeee", foreground=TEXT_COLOR, font=("Helvetica", 15))
        style.map("Tts.TButton", background=[("active", "#dddddd")])
        style.configure("Word.TFrame", background=CARD_BACKGROUND, relief="solid", borderwidth=1)
        style.configure("Word.TLabel", background=CARD_BACKGROUND)

        # Playback handle shared by every play request; released on close
        self.player = AudioPlayer()
        self.translation_flow = TranslationFlow(alert=self.alert, navigate=self.navigate_to_result)
        self.playback_flow = PlaybackFlow(alert=self.alert, player=self.player)

        container = ttk.Frame(self)
        container.pack(fill="both", expand=True)
        container.rowconfigure(0, weight=1)
        container.columnconfigure(0, weight=1)

        self.cards: Dict[str, ttk.Frame] = {}
        self.current_card: Optional[str] = None
        for CardClass in (InputCard, ResultCard):
            card = CardClass(parent=container, controller=self)
            self.cards[CardClass.__name__] = card
            card.grid(row=0, column=0, sticky="nsew")
            logger.debug(f"  Created: {CardClass.__name__}")

        self.protocol("WM_DELETE_WINDOW", self.on_close)
        logger.ui("Application initialized successfully")
        self.show_card("InputCard")

    def show_card(self, name: str) -> None:
        logger.ui_transition(self.current_card or "start", name)
        self.cards[name].tkraise()
        self.current_card = name

    # Thread-safe hooks used by the flows ------------------------------------

    def alert(self, title: str, message: str) -> None:
        """Blocking notification, scheduled onto the Tk main loop."""
        show = messagebox.showerror if title in (ERROR_TITLE, TTS_ERROR_TITLE) else messagebox.showinfo
        self.after(0, lambda: show(title, message))

    def navigate_to_result(self, payload: ResultPayload) -> None:
        def _show() -> None:
            self.cards["ResultCard"].set_payload(payload)
            self.show_card("ResultCard")
        self.after(0, _show)

    def run_in_background(self, name: str, work: Callable[[], object],
                          on_done: Optional[Callable[[], None]] = None) -> None:
        """Run `work` on a daemon thread; `on_done` runs on the main loop afterwards."""
        logger.task_start(name)

        def _run() -> None:
            with Timer() as timer:
                try:
                    work()
                except Exception as e:
                    logger.task_error(name, str(e), exc_info=True)
                    self.alert(ERROR_TITLE, str(e))
            logger.task_complete(name, duration_ms=timer.duration_ms)
            if on_done:
                self.after(0, on_done)

        threading.Thread(target=_run, daemon=True).start()

    def on_close(self) -> None:
        self.player.release()
        self.destroy()


# ---------------------------------------------------------------------------
# Cards
# ---------------------------------------------------------------------------

class InputCard(ttk.Frame):
    def __init__(self, parent, controller: SimpleTalkApp) -> None:
        super().__init__(parent, padding=20)
        self.controller = controller
        self.columnconfigure(0, weight=1)
        self.rowconfigure(0, weight=1)
        self.rowconfigure(4, weight=1)

        ttk.Label(
            self,
            text="Simple Talk",
            font=("Helvetica", 28, "bold"),
            anchor="w",
        ).grid(row=1, column=0, sticky="ew", pady=(0, 30))

        ttk.Label(
            self,
            text="input your sentence",
            font=("Helvetica", 12),
            foreground="#999999",
        ).grid(row=2, column=0, sticky="w")

        self.sentence_text = tk.Text(
            self,
            height=7,
            wrap="word",
            font=("Helvetica", 16),
            relief="solid",
            borderwidth=1,
            padx=15,
            pady=15,
            highlightthickness=0,
        )
        self.sentence_text.grid(row=3, column=0, sticky="ew", pady=(4, 20))

        self.translate_button = ttk.Button(
            self,
            text="Translate",
            style="Accent.TButton",
            command=self._on_translate_clicked,
        )
        self.translate_button.grid(row=4, column=0, sticky="new")

    def _on_translate_clicked(self) -> None:
        sentence = self.sentence_text.get("1.0", "end")
        logger.ui(f"Translate clicked ({len(sentence.strip())} chars)")
        self.translate_button.state(["disabled"])
        self.controller.run_in_background(
            "translate_sentence",
            lambda: self.controller.translation_flow.submit(sentence),
            on_done=lambda: self.translate_button.state(["!disabled"]),
        )


class ResultCard(ttk.Frame):
    def __init__(self, parent, controller: SimpleTalkApp) -> None:
        super().__init__(parent)
        self.controller = controller
        self.payload = ResultPayload()

        header = ttk.Frame(self, padding=(10, 10, 10, 0))
        header.pack(fill="x")
        ttk.Button(header, text="← Back", command=lambda: controller.show_card("InputCard")).pack(side="left")

        self.scrollable = ScrollableFrame(self)
        self.scrollable.pack(fill="both", expand=True)
        self.content = self.scrollable.content
        self.content.configure(padding=20)

        self.set_payload(self.payload)

    # Layout helpers ---------------------------------------------------------

    def _section_title(self, text: str) -> None:
        ttk.Label(self.content, text=text, font=("Helvetica", 20, "bold"),
                  foreground=ACCENT).pack(anchor="w", pady=(0, 10))

    def _label(self, text: str) -> None:
        ttk.Label(self.content, text=text, font=("Helvetica", 15, "bold"),
                  foreground=MUTED_COLOR).pack(anchor="w", pady=(10, 0))

    def _content_text(self, text: str) -> None:
        ttk.Label(self.content, text=text, font=("Helvetica", 16), wraplength=400,
                  justify="left").pack(anchor="w", pady=(0, 8))

    def _divider(self) -> None:
        ttk.Separator(self.content, orient="horizontal").pack(fill="x", pady=20)

    def _tts_button(self, pronunciation: str, command: Callable[[], None]) -> None:
        ttk.Button(self.content, text=f"🔊 {pronunciation}", style="Tts.TButton",
                   command=command).pack(fill="x", pady=5)

    # Rendering --------------------------------------------------------------

    def set_payload(self, payload: ResultPayload) -> None:
        """Rebuild the card for a new payload."""
        self.payload = payload
        view = build_view(payload)
        for child in self.content.winfo_children():
            child.destroy()

        self._section_title("Input Sentence")
        self._content_text(view.input_sentence)
        self._label("Pronunciation")
        self._tts_button(view.input_pronunciation, self._on_play_input)

        self._divider()

        self._section_title("Easy Sentence")
        self._content_text(view.easy_sentence)
        self._label("Pronunciation")
        self._tts_button(view.easy_pronunciation, self._on_play_easy)
        self._label("English Sentence")
        self._content_text(view.easy_english)

        self._divider()

        self._section_title("Word Dictionary")
        if not view.words:
            ttk.Label(self.content, text=NO_WORD_DATA, font=("Helvetica", 15),
                      foreground="#777777", anchor="center").pack(fill="x", pady=(10, 0))
        for word_card in view.words:
            frame = ttk.Frame(self.content, style="Word.TFrame", padding=12)
            frame.pack(fill="x", pady=(0, 10))
            ttk.Label(frame, text=word_card.heading, style="Word.TLabel",
                      font=("Helvetica", 16, "bold")).pack(anchor="w")
            for line in word_card.lines:
                ttk.Label(frame, text=line, style="Word.TLabel", font=("Helvetica", 14),
                          foreground=MUTED_COLOR, wraplength=380, justify="left").pack(anchor="w", pady=(4, 0))

        self.scrollable.scroll_to_top()
        logger.ui(f"Result card rendered ({len(view.words)} words, tts_url={payload.tts_url or '-'})")

    def _on_play_input(self) -> None:
        logger.ui("Play input pronunciation clicked")
        payload = self.payload
        self.controller.run_in_background(
            "play_input_pronunciation",
            lambda: self.controller.playback_flow.play_original(payload),
        )

    def _on_play_easy(self) -> None:
        logger.ui("Play easy pronunciation clicked")
        payload = self.payload
        self.controller.run_in_background(
            "play_easy_pronunciation",
            lambda: self.controller.playback_flow.play_simplified(payload),
        )


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    logger.separator("Application Starting")
    app = SimpleTalkApp()
    logger.success("Application window created, entering main loop")
    app.mainloop()
    logger.separator("Application Closed")


if __name__ == "__main__":
    main()
