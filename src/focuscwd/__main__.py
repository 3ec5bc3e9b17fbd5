from focuscwd.app import main

main()
