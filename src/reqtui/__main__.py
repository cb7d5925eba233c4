from reqtui.adapters.textual.app import main

main()
