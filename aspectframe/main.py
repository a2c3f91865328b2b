"""Точка входа в приложение."""
from aspectframe.app import AspectFrameApp


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    app = AspectFrameApp()
    app.mainloop()


if __name__ == "__main__":
    main()
